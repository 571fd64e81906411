# Log event names / error codes specific to the create_short_link lambda
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
SHORT_LINK_CREATED = 'SHORT_LINK_CREATED'

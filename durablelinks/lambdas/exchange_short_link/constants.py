# Log event names / error codes specific to the exchange_short_link lambda
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_REQUESTED_LINK = 'MISSING_REQUESTED_LINK'
SHORT_LINK_EXCHANGED = 'SHORT_LINK_EXCHANGED'

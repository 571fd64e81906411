import json
import logging

from durablelinks.dao.redis import ShortLinkRedisDAO
from durablelinks.dao.exceptions import DataStoreError
from durablelinks.exceptions import ConfigurationError, DomainNotAllowedError, LinkValidationError, StorageError
from durablelinks.links import LinkService
from durablelinks.types import LambdaContext, LambdaEvent, LambdaResponse
from durablelinks.utils import LinkSettings, app_prefix, guarantee_500_response, load_config
from durablelinks.lambdas.responses import response_200, response_400, response_403, response_500
from durablelinks.lambdas.create_short_link.constants import INVALID_JSON_BODY, SHORT_LINK_CREATED


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to create durable short links (POST /shortLinks)

    This Lambda handler follows this procedure:
    - Step 1: Load link settings and data store configuration
    - Step 2: Decode the request body (structured durable link or long durable link)
    - Step 3: Create (or reuse) the short link
    - Step 4: Respond with the short link and creation warnings

    Request body, either:
        {"durableLinkInfo": {"host": ..., "link": ..., ...}, "suffix": {"option": "SHORT"}}
        {"longDurableLink": "https://x.link/?link=...&apn=..."}

    HTTP responses:
        200: Short link created
            shortLink: the short link
            warnings: list of {warningCode, warningMessage}
        400: Bad client request
            message: invalid JSON, missing host/link, invalid host, scheme, etc.
            errorCode: validation error code
        403: Forbidden
            message: target link domain is not in the allow list
        500: Internal server error
            message: configuration or data store failure

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"durableLinkInfo": {"host": "x.link", "link": "https://example.com"}, "suffix": {"option": "SHORT"}}'}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])
        {'shortLink': 'https://x.link/aB3dE9', 'warnings': []}
    """
    # 1- Load link settings and data store configuration
    try:
        settings = LinkSettings.from_env()
        app_config = load_config('create_short_link')
    except ConfigurationError as e:
        logger.exception('Failed to load configuration for create short link function. Responding with 500.')
        return response_500(error_code=e.error_code)

    if 'redis' not in app_config:
        logger.error('Unsupported data store backend. Responding with 500.', extra={'backends': list(app_config)})
        return response_500()
    redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 2- Decode the request body
    try:
        payload = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(payload, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    try:
        service = LinkService(ShortLinkRedisDAO(**redis_config, prefix=app_prefix()), settings)
    except DataStoreError:
        logger.exception('Data store is unreachable. Responding with 500.')
        return response_500()

    # 3- Create (or reuse) the short link
    try:
        description = service.prepare_durable_link_request(payload)
        response = service.create_durable_link(description)
    except DomainNotAllowedError as e:
        logger.info('Target link domain not allowed. Responding with 403.', extra={'event': e.error_code})
        return response_403(message=str(e), error_code=e.error_code)
    except LinkValidationError as e:
        logger.info('Invalid durable link request. Responding with 400.', extra={'event': e.error_code, 'reason': str(e)})
        return response_400(message=str(e), error_code=e.error_code)
    except StorageError as e:
        logger.exception('Failed to store short link. Responding with 500.')
        return response_500(error_code=e.error_code)

    # 4- Respond with the short link and warnings
    logger.info(
        'Short link created. Responding with 200.',
        extra={'event': SHORT_LINK_CREATED, 'short_link': response.short_link},
    )
    return response_200(response.to_dict())

import json
import logging

from durablelinks.dao.redis import ShortLinkRedisDAO
from durablelinks.dao.exceptions import DataStoreError
from durablelinks.exceptions import ConfigurationError, LinkNotFoundError, LinkValidationError, StorageError
from durablelinks.links import LinkService
from durablelinks.types import LambdaContext, LambdaEvent, LambdaResponse
from durablelinks.utils import LinkSettings, app_prefix, guarantee_500_response, load_config
from durablelinks.lambdas.responses import response_200, response_400, response_404, response_500
from durablelinks.lambdas.exchange_short_link.constants import (
    INVALID_JSON_BODY,
    MISSING_REQUESTED_LINK,
    SHORT_LINK_EXCHANGED,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to exchange a short link for its long link (POST /exchangeShortLink)

    This Lambda handler follows this procedure:
    - Step 1: Load link settings and data store configuration
    - Step 2: Extract the requested link from the request body
    - Step 3: Resolve the requested (short or preview) link
    - Step 4: Respond with the long link

    HTTP responses:
        200: Long link found
            longLink: reconstructed long durable link
        400: Bad client request
            message: invalid JSON, missing 'requestedLink', unparsable link or bad path
        404: Not found
            message: no short link stored for the requested host and path
        500: Internal server error
            message: configuration or data store failure

    Example:
        >>> event = {'body': '{"requestedLink": "https://x.link/aB3dE9"}'}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])
        {'longLink': 'https://x.link/aB3dE9?link=https%3A%2F%2Fexample.com'}
    """
    # 1- Load link settings and data store configuration
    try:
        settings = LinkSettings.from_env()
        app_config = load_config('exchange_short_link')
    except ConfigurationError as e:
        logger.exception('Failed to load configuration for exchange short link function. Responding with 500.')
        return response_500(error_code=e.error_code)

    if 'redis' not in app_config:
        logger.error('Unsupported data store backend. Responding with 500.', extra={'backends': list(app_config)})
        return response_500()
    redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 2- Extract the requested link from the request body
    try:
        payload = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    requested_link = payload.get('requestedLink') if isinstance(payload, dict) else None
    if not isinstance(requested_link, str) or not requested_link:
        logger.info("Missing 'requestedLink' in body. Responding with 400.", extra={'event': MISSING_REQUESTED_LINK})
        return response_400(message="missing 'requestedLink' in JSON body", error_code=MISSING_REQUESTED_LINK)

    try:
        service = LinkService(ShortLinkRedisDAO(**redis_config, prefix=app_prefix()), settings)
    except DataStoreError:
        logger.exception('Data store is unreachable. Responding with 500.')
        return response_500()

    # 3- Resolve the requested link
    try:
        response = service.resolve_short_path(requested_link)
    except LinkNotFoundError as e:
        logger.info(
            'Short link not found. Responding with 404.',
            extra={'event': e.error_code, 'requested_link': requested_link},
        )
        return response_404(message=f"short link {requested_link} doesn't exist", error_code=e.error_code)
    except LinkValidationError as e:
        logger.info('Invalid requested link. Responding with 400.', extra={'event': e.error_code, 'reason': str(e)})
        return response_400(message=str(e), error_code=e.error_code)
    except StorageError as e:
        logger.exception('Failed to retrieve short link. Responding with 500.')
        return response_500(error_code=e.error_code)

    # 4- Respond with the long link
    logger.info(
        'Short link exchanged. Responding with 200.',
        extra={'event': SHORT_LINK_EXCHANGED, 'requested_link': requested_link},
    )
    return response_200(response.to_dict())

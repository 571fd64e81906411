from durablelinks.utils.config import LinkSettings, app_env, app_name, app_prefix, load_config
from durablelinks.utils.helpers import guarantee_500_response, require_environment
from durablelinks.utils.shortener import generate_path
from durablelinks.utils.logging import initialize_logging


__all__ = [
    'LinkSettings',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'guarantee_500_response',
    'require_environment',
    'generate_path',
    'initialize_logging',
]

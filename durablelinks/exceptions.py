class DurableLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:durable_links_error'


class LinkValidationError(DurableLinksError):
    """Base exception for rejected link requests."""

    error_code = 'link:validation_error'


class InvalidHostError(LinkValidationError):
    """Raised when the requested durable link host is not a valid host name."""

    error_code = 'link:invalid_host'


class DomainNotAllowedError(LinkValidationError):
    """Raised when the target link's domain is not in the allow list."""

    error_code = 'link:domain_not_allowed'


class InvalidAppStoreIdError(LinkValidationError):
    """Raised when the iOS App Store id is not numeric."""

    error_code = 'link:invalid_app_store_id'


class InvalidUrlFormatError(LinkValidationError):
    """Raised when a long durable link can't be parsed."""

    error_code = 'link:invalid_url_format'


class HostInvalidError(LinkValidationError):
    """Raised when a long durable link has no host."""

    error_code = 'link:host_invalid'


class MissingHostError(LinkValidationError):
    """Raised when a durable link request has no host."""

    error_code = 'link:missing_host'


class MissingLinkError(LinkValidationError):
    """Raised when a durable link request has no target link."""

    error_code = 'link:missing_link'


class InvalidUrlSchemeError(LinkValidationError):
    """Raised when the target link's scheme is not http or https."""

    error_code = 'link:invalid_url_scheme'


class InvalidRequestedLinkError(LinkValidationError):
    """Raised when a requested short link can't be parsed."""

    error_code = 'link:invalid_requested_link'


class InvalidPathFormatError(LinkValidationError):
    """Raised when a requested short link path isn't a single segment."""

    error_code = 'link:invalid_path_format'


class InvalidRequestFormatError(LinkValidationError):
    """Raised when a request body doesn't match the durable link schema."""

    error_code = 'link:invalid_request_format'


class LinkNotFoundError(DurableLinksError):
    """Raised when no short link is stored for a requested host and path."""

    error_code = 'link:not_found'


class StorageError(DurableLinksError):
    """Raised when the data store fails to serve a link request."""

    error_code = 'link:storage_error'


class ConfigurationError(DurableLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'

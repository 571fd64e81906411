"""Structured representation of a durable link request.

A durable link bundles a target link with optional platform fallbacks,
analytics parameters and social preview metadata. Every optional field is a
plain string where the empty string means "not specified".

Classes:
    SuffixOption:
        Requested path kind (SHORT or UNGUESSABLE).
    AndroidParameters, IosParameters, OtherPlatformParameters:
        Platform specific fallback parameters.
    SocialMetaTagInfo:
        Social preview metadata.
    MarketingParameters, ItunesConnectAnalytics, AnalyticsInfo:
        Analytics parameters.
    LinkDescription:
        The complete durable link description.

Example:
    >>> payload = {
    ...     'durableLinkInfo': {'host': 'x.link', 'link': 'https://example.com'},
    ...     'suffix': {'option': 'SHORT'},
    ... }
    >>> description = LinkDescription.from_dict(payload)
    >>> description.host, description.link, description.suffix_option
    ('x.link', 'https://example.com', <SuffixOption.SHORT: 'SHORT'>)
"""

from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any

from durablelinks.exceptions import InvalidRequestFormatError


class SuffixOption(StrEnum):
    SHORT = 'SHORT'
    UNGUESSABLE = 'UNGUESSABLE'

    @classmethod
    def parse(cls, value: str | None) -> 'SuffixOption | None':
        """Return the matching option, or None for empty and unknown values."""
        try:
            return cls(value) if value else None
        except ValueError:
            return None


def _bind(cls, data: Any, block: str):
    """Bind a JSON object onto a flat dataclass of string fields.

    Each dataclass field declares its JSON name in `metadata['json']`.
    Unknown keys are ignored and missing (or null) keys keep the default.
    """
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise InvalidRequestFormatError(f"'{block}' must be a JSON object.")

    values = {}
    for f in fields(cls):
        name = f.metadata['json']
        value = data.get(name)
        if value is None:
            continue
        if not isinstance(value, str):
            raise InvalidRequestFormatError(f"'{block}.{name}' must be a string (given type: {type(value).__name__}).")
        values[f.name] = value
    return cls(**values)


def _dump(instance) -> dict[str, str]:
    return {f.metadata['json']: getattr(instance, f.name) for f in fields(instance)}


# fmt: off
@dataclass(frozen=True)
class AndroidParameters:
    package_name: str = field(default='', metadata={'json': 'androidPackageName'})
    fallback_link: str = field(default='', metadata={'json': 'androidFallbackLink'})
    min_version_code: str = field(default='', metadata={'json': 'androidMinPackageVersionCode'})


@dataclass(frozen=True)
class IosParameters:
    app_store_id: str = field(default='', metadata={'json': 'iosAppStoreId'})
    fallback_link: str = field(default='', metadata={'json': 'iosFallbackLink'})
    ipad_fallback_link: str = field(default='', metadata={'json': 'iosIpadFallbackLink'})


@dataclass(frozen=True)
class OtherPlatformParameters:
    fallback_url: str = field(default='', metadata={'json': 'fallbackUrl'})


@dataclass(frozen=True)
class SocialMetaTagInfo:
    title: str = field(default='', metadata={'json': 'socialTitle'})
    description: str = field(default='', metadata={'json': 'socialDescription'})
    image_link: str = field(default='', metadata={'json': 'socialImageLink'})


@dataclass(frozen=True)
class MarketingParameters:
    utm_source: str = field(default='', metadata={'json': 'utmSource'})
    utm_medium: str = field(default='', metadata={'json': 'utmMedium'})
    utm_campaign: str = field(default='', metadata={'json': 'utmCampaign'})
    utm_term: str = field(default='', metadata={'json': 'utmTerm'})
    utm_content: str = field(default='', metadata={'json': 'utmContent'})


@dataclass(frozen=True)
class ItunesConnectAnalytics:
    at: str = field(default='', metadata={'json': 'at'})  # Affiliate token
    ct: str = field(default='', metadata={'json': 'ct'})  # Campaign token
    mt: str = field(default='', metadata={'json': 'mt'})  # Media type
    pt: str = field(default='', metadata={'json': 'pt'})  # Provider token
# fmt: on


@dataclass(frozen=True)
class AnalyticsInfo:
    marketing: MarketingParameters = field(default_factory=MarketingParameters)
    itunes_connect: ItunesConnectAnalytics = field(default_factory=ItunesConnectAnalytics)


@dataclass(frozen=True)
class LinkDescription:
    """Represent a durable link request.

    Attributes:
        host (str):
            Authority of the durable link (e.g. 'x.link'). Required.
        link (str):
            Destination URL. Required.
        android, ios, other_platform (...Parameters):
            Platform fallback parameters, each field independently optional.
        social (SocialMetaTagInfo):
            Social preview metadata.
        analytics (AnalyticsInfo):
            Marketing (utm_*) and iTunes Connect analytics parameters.
        suffix_option (SuffixOption | None):
            SHORT requests a short reusable path. Anything else (including None)
            requests an unguessable, always freshly minted path.
    """

    host: str = ''
    link: str = ''
    android: AndroidParameters = field(default_factory=AndroidParameters)
    ios: IosParameters = field(default_factory=IosParameters)
    other_platform: OtherPlatformParameters = field(default_factory=OtherPlatformParameters)
    social: SocialMetaTagInfo = field(default_factory=SocialMetaTagInfo)
    analytics: AnalyticsInfo = field(default_factory=AnalyticsInfo)
    suffix_option: SuffixOption | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> 'LinkDescription':
        """Bind a create-link request body onto a LinkDescription

        Binding is structural and best-effort: missing blocks and fields stay
        empty, unknown keys are ignored. Required fields are NOT checked here.

        Raises:
            InvalidRequestFormatError:
                If a block is not an object or a field is not a string.
        """
        if not isinstance(payload, dict):
            raise InvalidRequestFormatError('Request body must be a JSON object.')

        info = payload.get('durableLinkInfo')
        if info is None:
            info = {}
        if not isinstance(info, dict):
            raise InvalidRequestFormatError("'durableLinkInfo' must be a JSON object.")

        host, link = info.get('host'), info.get('link')
        for name, value in (('host', host), ('link', link)):
            if value is not None and not isinstance(value, str):
                raise InvalidRequestFormatError(f"'durableLinkInfo.{name}' must be a string.")

        analytics = info.get('analyticsInfo')
        if analytics is None:
            analytics = {}
        if not isinstance(analytics, dict):
            raise InvalidRequestFormatError("'analyticsInfo' must be a JSON object.")

        suffix = payload.get('suffix')
        if suffix is None:
            suffix = {}
        if not isinstance(suffix, dict):
            raise InvalidRequestFormatError("'suffix' must be a JSON object.")
        option = suffix.get('option')
        if option is not None and not isinstance(option, str):
            raise InvalidRequestFormatError("'suffix.option' must be a string.")

        return cls(
            host=host or '',
            link=link or '',
            android=_bind(AndroidParameters, info.get('androidParameters'), 'androidParameters'),
            ios=_bind(IosParameters, info.get('iosParameters'), 'iosParameters'),
            other_platform=_bind(OtherPlatformParameters, info.get('otherPlatformParameters'), 'otherPlatformParameters'),
            social=_bind(SocialMetaTagInfo, info.get('socialMetaTagInfo'), 'socialMetaTagInfo'),
            analytics=AnalyticsInfo(
                marketing=_bind(MarketingParameters, analytics.get('marketingParameters'), 'marketingParameters'),
                itunes_connect=_bind(ItunesConnectAnalytics, analytics.get('itunesConnectAnalytics'), 'itunesConnectAnalytics'),
            ),
            suffix_option=SuffixOption.parse(option),
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the description in the create-link request body shape."""
        payload = {
            'durableLinkInfo': {
                'host': self.host,
                'link': self.link,
                'androidParameters': _dump(self.android),
                'iosParameters': _dump(self.ios),
                'otherPlatformParameters': _dump(self.other_platform),
                'socialMetaTagInfo': _dump(self.social),
                'analyticsInfo': {
                    'marketingParameters': _dump(self.analytics.marketing),
                    'itunesConnectAnalytics': _dump(self.analytics.itunes_connect),
                },
            },
        }
        if self.suffix_option is not None:
            payload['suffix'] = {'option': str(self.suffix_option)}
        return payload

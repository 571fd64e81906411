from durablelinks.models.link_description import (
    AnalyticsInfo,
    AndroidParameters,
    IosParameters,
    ItunesConnectAnalytics,
    LinkDescription,
    MarketingParameters,
    OtherPlatformParameters,
    SocialMetaTagInfo,
    SuffixOption,
)
from durablelinks.models.link_responses import CreationWarning, LongLinkResponse, ShortLinkResponse, WarningCode
from durablelinks.models.short_link_model import ShortLinkModel


__all__ = [
    'AnalyticsInfo',
    'AndroidParameters',
    'IosParameters',
    'ItunesConnectAnalytics',
    'LinkDescription',
    'MarketingParameters',
    'OtherPlatformParameters',
    'SocialMetaTagInfo',
    'SuffixOption',
    'CreationWarning',
    'LongLinkResponse',
    'ShortLinkResponse',
    'WarningCode',
    'ShortLinkModel',
]

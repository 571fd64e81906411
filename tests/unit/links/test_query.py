from durablelinks.links.query import QUERY_KEYS, QueryEncoding, field_value, with_field
from durablelinks.models import AndroidParameters, LinkDescription


def test_query_keys_are_unique_and_start_with_link():
    keys = [key for key, _ in QUERY_KEYS]

    assert keys[0] == 'link'
    assert len(keys) == len(set(keys)) == 20


def test_query_keys_point_at_description_fields():
    description = LinkDescription()

    for _, attrs in QUERY_KEYS:
        assert field_value(description, attrs) == ''


def test_with_field_replaces_nested_values():
    description = LinkDescription(host='x.link', android=AndroidParameters(fallback_link='https://example.com/android'))

    updated = with_field(description, ('android', 'package_name'), 'com.example.app')

    assert updated.android == AndroidParameters(package_name='com.example.app', fallback_link='https://example.com/android')
    assert updated.host == 'x.link'
    assert description.android.package_name == ''


def test_add_if_present_skips_empty_values():
    encoding = QueryEncoding()
    encoding.add('link', '')
    encoding.add_if_present('apn', '')
    encoding.add_if_present('afl', 'https://example.com/android')

    assert encoding.keys() == ['link', 'afl']
    assert len(encoding) == 2
    assert encoding.get('afl') == 'https://example.com/android'
    assert encoding.get('apn') is None
    assert encoding.get('apn', '') == ''


def test_canonical_sorts_keys_and_escapes_values():
    encoding = QueryEncoding([('link', 'https://example.com/?a=1&b=2'), ('apn', 'com.example.app'), ('st', 'Hello World')])

    assert encoding.canonical() == 'apn=com.example.app&link=https%3A%2F%2Fexample.com%2F%3Fa%3D1%26b%3D2&st=Hello+World'


def test_canonical_is_independent_of_insertion_order():
    a = QueryEncoding([('link', 'https://example.com'), ('utm_source', 'mail'), ('isi', '123')])
    b = QueryEncoding([('isi', '123'), ('link', 'https://example.com'), ('utm_source', 'mail')])

    assert a.canonical() == b.canonical()
    assert a == b
    assert list(a) != list(b)


def test_long_link():
    encoding = QueryEncoding([('link', 'https://example.com')])

    assert encoding.long_link('https', 'x.link') == 'https://x.link/?link=https%3A%2F%2Fexample.com'


def test_equality_with_other_types():
    assert QueryEncoding() != 'link='

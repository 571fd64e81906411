"""Map a LinkDescription to its query parameters and creation warnings."""

import logging

from durablelinks.links.query import QUERY_KEYS, QueryEncoding, field_value
from durablelinks.links.validation import is_url
from durablelinks.models import CreationWarning, LinkDescription, WarningCode


logger = logging.getLogger(__name__)

# iTunes Connect parameters that only make sense alongside 'isi' / 'pt'
ISI_DEPENDENT_KEYS = ('at', 'ct', 'mt', 'pt')
PT_DEPENDENT_KEYS = ('at', 'ct', 'mt')


def _unrecognized(key: str, prerequisite: str) -> CreationWarning:
    return CreationWarning(
        code=WarningCode.UNRECOGNIZED_PARAM,
        message=f"Param '{key}' is not needed, since '{prerequisite}' is not specified.",
    )


def canonicalize(description: LinkDescription) -> tuple[QueryEncoding, list[CreationWarning]]:
    """Build the query parameters of a durable link and collect warnings

    - 'link' is always included; every other key only when its field is non-empty.
    - A non-URL social image link ('si') yields MALFORMED_PARAM.
    - Without 'isi', each of 'at', 'ct', 'mt', 'pt' yields UNRECOGNIZED_PARAM.
      Without 'pt', each of 'at', 'ct', 'mt' yields UNRECOGNIZED_PARAM as well,
      so a parameter can be flagged twice.

    Warnings never drop parameters.

    Returns:
        tuple[QueryEncoding, list[CreationWarning]]
    """
    encoding = QueryEncoding()
    values = {}
    for key, attrs in QUERY_KEYS:
        values[key] = value = field_value(description, attrs)
        if key == 'link':
            encoding.add(key, value)
        else:
            encoding.add_if_present(key, value)

    warnings = []
    if values['si'] and not is_url(values['si']):
        warnings.append(CreationWarning(code=WarningCode.MALFORMED_PARAM, message="Param 'si' is not a valid URL"))

    if not values['isi']:
        warnings.extend(_unrecognized(key, 'isi') for key in ISI_DEPENDENT_KEYS if values[key])
    if not values['pt']:
        warnings.extend(_unrecognized(key, 'pt') for key in PT_DEPENDENT_KEYS if values[key])

    if warnings:
        logger.debug('Durable link parameters produced warnings.', extra={'warnings': [w.to_dict() for w in warnings]})
    return encoding, warnings

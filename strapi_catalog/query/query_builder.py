# strapi_catalog/query/query_builder.py

"""Compile fetch options into the CMS bracket-encoded query string.

The CMS parses nested parameters written with brackets, so a structured
options mapping is flattened into ordered ``(key, value)`` pairs:

    populate                      → populate=a,b
    filters[field][op]            → filters[slug][$eq]=x
    filters[field][op][i]         → filters[id][$in][0]=1
    filters[field][i]             → filters[tags][0]=a
    sort[i]                       → sort[0]=name:asc
    pagination[page|pageSize]     → pagination[pageSize]=100

Pairs are emitted in the order: populate, filters (mapping order),
sort, pagination. Unknown option keys are ignored.
"""

from collections.abc import Mapping, Sequence
from typing import TypedDict, Union
from urllib.parse import quote_plus, urlencode

FilterScalar = Union[str, int, float, bool, None]
FilterValue = Union[
    FilterScalar,
    Sequence[FilterScalar],
    Mapping[str, Union[FilterScalar, Sequence[FilterScalar]]],
]


class PaginationOptions(TypedDict, total=False):
    page: int
    pageSize: int


class FetchOptions(TypedDict, total=False):
    """Declarative description of one collection request."""

    populate: Union[str, Sequence[str]]
    filters: Mapping[str, FilterValue]
    sort: Union[str, Sequence[str]]
    pagination: PaginationOptions


# ── Value helpers ────────────────────────────────────────


def stringify(value: object) -> str:
    """Render a filter value in its literal text form (``true``, ``null``, ``5``)."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_sequence(value: object) -> bool:
    """Lists and tuples are indexed; strings and bytes are scalars."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def _form_quote(
    value: str,
    safe: str = "",
    encoding: str | None = None,
    errors: str | None = None,
) -> str:
    """``quote_plus`` that also escapes ``~``, which it always treats as safe."""
    return quote_plus(value, safe, encoding, errors).replace("~", "%7E")


# ── Flattening ───────────────────────────────────────────


def _filter_params(
    filters: Mapping[str, FilterValue],
) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    for field_name, value in filters.items():
        prefix = f"filters[{field_name}]"
        if isinstance(value, Mapping):
            for operator, operand in value.items():
                key = f"{prefix}[{operator}]"
                if _is_sequence(operand):
                    params.extend(
                        (f"{key}[{index}]", stringify(item))
                        for index, item in enumerate(operand)
                    )
                else:
                    params.append((key, stringify(operand)))
        elif _is_sequence(value):
            params.extend(
                (f"{prefix}[{index}]", stringify(item))
                for index, item in enumerate(value)
            )
        else:
            params.append((prefix, stringify(value)))
    return params


def build_query_params(options: Mapping[str, object]) -> list[tuple[str, str]]:
    """Flatten *options* into ordered, unencoded query pairs."""
    params: list[tuple[str, str]] = []

    populate = options.get("populate")
    if populate:
        params.append((
            "populate",
            ",".join(populate) if _is_sequence(populate) else str(populate),
        ))

    filters = options.get("filters")
    if filters:
        params.extend(_filter_params(filters))

    sort = options.get("sort")
    if sort:
        sort_items = sort if _is_sequence(sort) else [sort]
        params.extend(
            (f"sort[{index}]", str(item))
            for index, item in enumerate(sort_items)
        )

    pagination = options.get("pagination")
    if pagination:
        if pagination.get("page") is not None:
            params.append(
                ("pagination[page]", stringify(pagination["page"]))
            )
        if pagination.get("pageSize") is not None:
            params.append(
                ("pagination[pageSize]", stringify(pagination["pageSize"]))
            )

    return params


def build_query_string(options: Mapping[str, object] | None = None) -> str:
    """Encode *options* as ``?key=value&...``, or ``""`` when nothing is set.

    Values are form-encoded the way browsers' ``URLSearchParams`` does it:
    spaces become ``+``, brackets, ``$`` and ``~`` are percent-encoded,
    ``*`` is left as-is.
    """
    params = build_query_params(options or {})
    if not params:
        return ""
    return "?" + urlencode(params, safe="*", quote_via=_form_quote)

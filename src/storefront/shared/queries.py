"""Helpers for reading whole result sets through Protean querysets."""

PAGE_SIZE = 100


def every(query, offset: int = 0, page_size: int = PAGE_SIZE) -> list:
    """All results of ``query`` from ``offset`` on.

    A queryset returns at most 100 rows unless given a limit, so results are
    read a page at a time until a short page comes back.
    """
    results = []
    while True:
        page = query.offset(offset).limit(page_size).all().items
        results.extend(page)
        if len(page) < page_size:
            return results
        offset += page_size

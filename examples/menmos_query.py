#!/usr/bin/env python3
"""
Query example: structured expressions, paging and facets.

Requirements:
- MENMOS_HOST and MENMOS_TOKEN environment variables set

Usage:
    python examples/menmos_query.py
"""

import os

from dotenv import load_dotenv

from menmos import Expression, MenmosClient, Query, parse_expression

load_dotenv()


def main() -> None:
    if not os.getenv("MENMOS_HOST"):
        print("Error: MENMOS_HOST environment variable is required")
        return

    with MenmosClient() as client:
        # Builder form: photos owned by alice, or anything under folder-1
        expression = (
            Expression().and_tag("photos").and_key_value("owner", "alice").or_parent("folder-1")
        )
        query = Query(expression).with_size(5).with_facets(True)

        page = client.query(query)
        print(f"{page.count} of {page.total} hits")
        for hit in page.hits:
            print(" -", hit.id, hit.meta.name, hit.url)
        if page.facets:
            print("tags:", page.facets.tags)

        # The same expression, parsed from its JSON form
        parsed = parse_expression(
            {"or": [{"and": [{"tag": "photos"}, {"key": "owner", "value": "alice"}]},
                    {"parent": "folder-1"}]}
        )
        assert parsed == expression

        # Free text is passed through to the server's query language
        text_page = client.query(Query("photos and not drafts", sign_urls=False))
        print("free text:", text_page.total, "hits")

        # Walk every page
        offset = 0
        while True:
            page = client.query(Query(expression, from_=offset, size=20))
            if not page.hits:
                break
            offset += len(page.hits)
        print("walked", offset, "hits")


if __name__ == "__main__":
    main()

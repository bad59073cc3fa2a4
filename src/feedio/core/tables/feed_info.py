"""Built-in descriptor for 'feed_info.txt' (publisher metadata, one row)."""

from __future__ import annotations

from ..grammar import SemanticType, TableDescriptor, columns_of

FEED_INFO_DESC = TableDescriptor(
    name="feed_info.txt",
    columns=columns_of(
        {
            "feed_publisher_name": SemanticType.TEXT,
            "feed_publisher_url": SemanticType.TEXT,
            "feed_lang": SemanticType.TEXT,
            "feed_start_date": SemanticType.DATE,
            "feed_end_date": SemanticType.DATE,
            "feed_version": SemanticType.TEXT,
            "feed_contact_email": SemanticType.TEXT,
            "feed_contact_url": SemanticType.TEXT,
        }
    ),
    is_built_in=True,
)

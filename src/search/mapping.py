"""OpenSearch index mapping for events."""

INDEX_SETTINGS = {
    "settings": {
        "number_of_shards": 1,
        "number_of_replicas": 0,
    },
    "mappings": {
        "properties": {
            # Full-text fields; keyword sub-fields back exact filters and facets
            "eventName": {
                "type": "text",
                "fields": {
                    "analyzed": {"type": "text", "analyzer": "standard"},
                    "keyword": {"type": "keyword"},
                },
            },
            "category": {
                "type": "text",
                "fields": {
                    "analyzed": {"type": "text", "analyzer": "standard"},
                    "keyword": {"type": "keyword"},
                },
            },
            "location": {
                "type": "text",
                "fields": {"keyword": {"type": "keyword"}},
            },
            # Pricing
            "price": {"type": "float"},
        }
    },
}

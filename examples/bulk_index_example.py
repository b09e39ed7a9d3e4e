"""批量索引与相似文档查询使用示例.

本文件展示了如何使用 BulkIndexer 批量写入文档，再用 RelatedIndexClient 查询相似文档。
"""

from esrelated import BoostedFields, BulkIndexer, ClusterConfig, RelatedIndexClient

ARTICLES = [
    {"id": "1", "title": "Elasticsearch 入门", "tags": ["search", "es"]},
    {"id": "2", "title": "Elasticsearch 性能调优", "tags": ["es", "performance"]},
    {"id": "3", "title": "Python 异步编程", "tags": ["python", "asyncio"]},
    {"id": "4", "title": "用 Python 写 Elasticsearch 客户端", "tags": ["python", "es"]},
]


def report(result):
    """每个批次提交后打印结果."""
    items = result.get("items", [])
    print(f"批次提交完成: {len(items)} 个文档, errors={result.get('errors')}")


def main():
    with RelatedIndexClient("articles", cluster=ClusterConfig("127.0.0.1:9200")) as client:
        if client.index_exists():
            client.drop_index()
        client.setup_index(["title", "tags"], settings={"number_of_shards": 1})

        # 每 2 个文档提交一次，最后一次提交后立即可见
        with BulkIndexer(client, 2, result_callback=report, refresh="wait_for") as bulk:
            for article in ARTICLES:
                bulk.index(
                    article["id"],
                    {"title": article["title"], "tags": ",".join(article["tags"])},
                )

        print("相似文档:", client.related_to("4", ["title", "tags"], size=3))
        print(
            "加权相似文档:",
            client.boosted_related_to(
                "4",
                [BoostedFields("tags", boost=3), BoostedFields("title")],
                size=3,
                tie_breaker=0.3,
            ),
        )


if __name__ == "__main__":
    main()

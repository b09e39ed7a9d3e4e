"""批量索引器单元测试."""

import unittest
from unittest.mock import MagicMock

from esrelated.bulk import BulkConfigError, BulkIndexer
from esrelated.related import BackendError, RelatedIndexClient


def _header(doc_id):
    return {"index": {"_id": doc_id}}


class TestBulkIndexer(unittest.TestCase):
    """BulkIndexer 类单元测试."""

    def setUp(self):
        """设置测试环境."""
        self.backend = MagicMock(spec=RelatedIndexClient)
        self.backend.bulk.side_effect = lambda operations, **kwargs: {
            "items": len(operations) // 2
        }
        self.results = []
        self.bulk = BulkIndexer(
            self.backend, chunk_size=2, result_callback=self.results.append
        )

    def test_initialization(self):
        """测试初始化不触发任何请求."""
        self.assertEqual(self.bulk.chunk_size, 2)
        self.assertIsNone(self.bulk.refresh)
        self.assertEqual(self.bulk.pending_count, 0)
        self.backend.bulk.assert_not_called()

    def test_invalid_chunk_size(self):
        """测试非法批次大小."""
        for chunk_size in (0, -1, True, 2.5, "10"):
            with self.assertRaises(BulkConfigError):
                BulkIndexer(self.backend, chunk_size=chunk_size)

    def test_invalid_callback(self):
        """测试不可调用的回调."""
        with self.assertRaises(BulkConfigError):
            BulkIndexer(self.backend, chunk_size=2, result_callback="print")

    def test_index_below_chunk_size(self):
        """测试未达到批次大小时不提交."""
        self.bulk.index("a", {"title": "A"})

        self.assertEqual(self.bulk.pending_count, 1)
        self.assertEqual(
            self.bulk.pending_operations, [_header("a"), {"title": "A"}]
        )
        self.backend.bulk.assert_not_called()

    def test_example_scenario(self):
        """测试完整的索引会话."""
        self.bulk.index("a", {"title": "A"})
        self.assertEqual(self.bulk.pending_count, 1)

        self.bulk.index("b", {"title": "B"})
        self.assertEqual(self.bulk.pending_count, 0)
        self.backend.bulk.assert_called_once_with(
            [_header("a"), {"title": "A"}, _header("b"), {"title": "B"}]
        )
        self.assertEqual(self.results, [{"items": 2}])

        self.bulk.index("c", {"title": "C"})
        self.assertEqual(self.bulk.pending_count, 1)

        self.bulk.done()
        self.assertEqual(self.backend.bulk.call_count, 2)
        self.backend.bulk.assert_called_with([_header("c"), {"title": "C"}])
        self.assertEqual(self.results, [{"items": 2}, {"items": 1}])
        self.assertEqual(self.bulk.pending_count, 0)

        self.bulk.done()
        self.assertEqual(self.backend.bulk.call_count, 2)
        self.assertEqual(len(self.results), 2)

    def test_chunk_size_trigger(self):
        """测试每达到批次大小恰好提交一次."""
        for chunk_size in (1, 3, 7):
            backend = MagicMock()
            bulk = BulkIndexer(backend, chunk_size=chunk_size)
            for i in range(chunk_size):
                bulk.index(str(i), {"n": i})
            self.assertEqual(backend.bulk.call_count, 1)
            self.assertEqual(bulk.pending_count, 0)

    def test_chunk_size_one_flushes_every_document(self):
        """测试批次大小为 1 时每个文档单独提交."""
        backend = MagicMock()
        bulk = BulkIndexer(backend, chunk_size=1)
        bulk.index(1, {"n": 1})
        bulk.index(2, {"n": 2})

        self.assertEqual(backend.bulk.call_count, 2)
        backend.bulk.assert_called_with([_header(2), {"n": 2}])

    def test_order_preserved(self):
        """测试提交顺序与调用顺序一致."""
        backend = MagicMock()
        bulk = BulkIndexer(backend, chunk_size=100)
        ids = ["z", "a", "m", "b"]
        for doc_id in ids:
            bulk.index(doc_id, {"id": doc_id})
        bulk.done()

        operations = backend.bulk.call_args.args[0]
        self.assertEqual(operations[0::2], [_header(i) for i in ids])
        self.assertEqual(operations[1::2], [{"id": i} for i in ids])

    def test_fields_forwarded_unmodified(self):
        """测试文档体原样提交."""
        backend = MagicMock()
        bulk = BulkIndexer(backend, chunk_size=1)
        fields = {"title": "A", "meta": {"tags": ["x", "y"]}, "rank": 3}
        bulk.index("a", fields)

        self.assertIs(backend.bulk.call_args.args[0][1], fields)

    def test_done_idempotent(self):
        """测试重复调用 done 只提交一次."""
        self.bulk.index("a", {"title": "A"})
        self.bulk.done()
        self.bulk.done()

        self.assertEqual(self.backend.bulk.call_count, 1)
        self.assertEqual(len(self.results), 1)

    def test_done_without_documents(self):
        """测试没有文档时 done 为空操作."""
        result = self.bulk.done()

        self.assertIsNone(result)
        self.backend.bulk.assert_not_called()
        self.assertEqual(self.results, [])

    def test_callback_receives_backend_result(self):
        """测试回调收到后端返回的同一对象."""
        response = object()
        backend = MagicMock()
        backend.bulk.return_value = response
        callback = MagicMock()
        bulk = BulkIndexer(backend, chunk_size=1, result_callback=callback)

        returned = bulk.index("a", {"title": "A"})

        self.assertIsNone(returned)
        callback.assert_called_once()
        self.assertIs(callback.call_args.args[0], response)

    def test_flush_returns_backend_result(self):
        """测试 flush 返回后端结果."""
        backend = MagicMock()
        backend.bulk.return_value = {"errors": False}
        bulk = BulkIndexer(backend, chunk_size=10)
        bulk.index("a", {"title": "A"})

        self.assertEqual(bulk.flush(), {"errors": False})

    def test_no_callback(self):
        """测试未配置回调时正常提交."""
        backend = MagicMock()
        bulk = BulkIndexer(backend, chunk_size=1)
        bulk.index("a", {"title": "A"})
        bulk.done()

        backend.bulk.assert_called_once()

    def test_refresh_forwarded(self):
        """测试配置 refresh 时透传给后端."""
        backend = MagicMock()
        bulk = BulkIndexer(backend, chunk_size=1, refresh="wait_for")
        bulk.index("a", {"title": "A"})

        backend.bulk.assert_called_once_with(
            [_header("a"), {"title": "A"}], refresh="wait_for"
        )

    def test_refresh_false_forwarded(self):
        """测试 refresh=False 也会显式透传."""
        backend = MagicMock()
        bulk = BulkIndexer(backend, chunk_size=1, refresh=False)
        bulk.index("a", {"title": "A"})

        self.assertIs(backend.bulk.call_args.kwargs["refresh"], False)

    def test_refresh_not_sent_by_default(self):
        """测试未配置 refresh 时不发送该参数."""
        self.bulk.index("a", {"title": "A"})
        self.bulk.done()

        self.assertEqual(self.backend.bulk.call_args.kwargs, {})

    def test_reset_discards_pending(self):
        """测试 reset 丢弃未提交文档."""
        self.bulk.index("a", {"title": "A"})
        self.bulk.reset()
        self.bulk.done()

        self.assertEqual(self.bulk.pending_count, 0)
        self.backend.bulk.assert_not_called()

    def test_new_batch_after_flush(self):
        """测试提交后新批次不包含旧内容."""
        self.bulk.index("a", {"title": "A"})
        self.bulk.index("b", {"title": "B"})
        self.bulk.index("c", {"title": "C"})

        self.assertEqual(
            self.bulk.pending_operations, [_header("c"), {"title": "C"}]
        )

    def test_backend_error_propagates_and_clears_batch(self):
        """测试后端异常向上抛出且批次不会被重复提交."""
        backend = MagicMock()
        backend.bulk.side_effect = BackendError("connection refused")
        bulk = BulkIndexer(backend, chunk_size=2)
        bulk.index("a", {"title": "A"})

        with self.assertRaises(BackendError):
            bulk.index("b", {"title": "B"})

        self.assertEqual(bulk.pending_count, 0)
        self.assertEqual(bulk.flushed_batches, 0)
        bulk.done()
        self.assertEqual(backend.bulk.call_count, 1)

    def test_callback_error_propagates_and_clears_batch(self):
        """测试回调异常向上抛出且批次不会被重复提交."""
        backend = MagicMock()
        callback = MagicMock(side_effect=RuntimeError("callback failed"))
        bulk = BulkIndexer(backend, chunk_size=5, result_callback=callback)
        bulk.index("a", {"title": "A"})

        with self.assertRaises(RuntimeError):
            bulk.done()

        self.assertEqual(bulk.pending_count, 0)
        bulk.done()
        self.assertEqual(backend.bulk.call_count, 1)
        self.assertEqual(callback.call_count, 1)

    def test_statistics(self):
        """测试批次与文档计数."""
        for i in range(5):
            self.bulk.index(str(i), {"n": i})
        self.bulk.done()

        self.assertEqual(self.bulk.flushed_batches, 3)
        self.assertEqual(self.bulk.indexed_total, 5)

    def test_context_manager_flushes_on_exit(self):
        """测试上下文管理器正常退出时提交剩余文档."""
        backend = MagicMock()
        with BulkIndexer(backend, chunk_size=10) as bulk:
            bulk.index("a", {"title": "A"})

        backend.bulk.assert_called_once_with([_header("a"), {"title": "A"}])

    def test_context_manager_discards_on_error(self):
        """测试上下文管理器异常退出时丢弃未提交文档."""
        backend = MagicMock()
        with self.assertRaises(ValueError):
            with BulkIndexer(backend, chunk_size=10) as bulk:
                bulk.index("a", {"title": "A"})
                raise ValueError("bad document")

        backend.bulk.assert_not_called()
        self.assertEqual(bulk.pending_count, 0)


if __name__ == "__main__":
    unittest.main()

import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from nutrigen.infra.Image_Store import JsonImageStore, MemoryImageStore
from nutrigen.utilities.errors import ImageStoreError, StoreFullError


class TestMemoryImageStore(unittest.TestCase):

    def test_put_get_and_overwrite(self):
        store = MemoryImageStore()
        self.assertIsNone(store.get("k"))
        store.put("k", "v1")
        store.put("k", "v2")
        self.assertEqual(store.get("k"), "v2")
        self.assertEqual(len(store), 1)
        self.assertIn("k", store)

    def test_empty_store_is_truthy(self):
        store = MemoryImageStore()
        self.assertEqual(len(store), 0)
        self.assertTrue(store)

    def test_overflow_raises_and_keeps_contents(self):
        store = MemoryImageStore(max_bytes=10)
        store.put("a", "1234")          # 5 chars
        with self.assertRaises(StoreFullError):
            store.put("b", "123456")    # would make 12
        self.assertIsNone(store.get("b"))
        self.assertEqual(store.get("a"), "1234")
        self.assertEqual(store.used_bytes(), 5)
        self.assertTrue(issubclass(StoreFullError, ImageStoreError))


class TestJsonImageStore(unittest.TestCase):

    def test_entries_survive_a_new_instance(self):
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "cache" / "images.json"
            JsonImageStore(path).put("nutrigen_img_v2_粥_200", "data:image/png;base64,AAAA")

            reopened = JsonImageStore(path)
            self.assertEqual(reopened.get("nutrigen_img_v2_粥_200"), "data:image/png;base64,AAAA")
            with open(path, encoding="utf-8") as f:
                self.assertEqual(json.load(f), {"nutrigen_img_v2_粥_200": "data:image/png;base64,AAAA"})

    def test_rejected_write_is_not_persisted(self):
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "images.json"
            store = JsonImageStore(path, max_bytes=8)
            with self.assertRaises(StoreFullError):
                store.put("key", "too-long-value")
            self.assertFalse(path.exists())

    def test_corrupt_file_reads_as_empty(self):
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "images.json"
            path.write_text("{not json", encoding="utf-8")
            store = JsonImageStore(path)
            self.assertIsNone(store.get("anything"))
            store.put("k", "v")
            self.assertEqual(JsonImageStore(path).get("k"), "v")

    def test_undecodable_file_reads_as_empty(self):
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "images.json"
            path.write_bytes(b'{"k": "\xff\xfe"}')
            store = JsonImageStore(path)
            with self.assertLogs("nutrigen.infra.Image_Store", level="ERROR"):
                self.assertIsNone(store.get("k"))
            self.assertEqual(len(store), 0)

    def test_unreadable_path_reads_as_empty(self):
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "images.json"
            path.mkdir()
            self.assertIsNone(JsonImageStore(path).get("k"))


if __name__ == '__main__':
    unittest.main()

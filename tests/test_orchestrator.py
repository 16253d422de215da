import unittest
from pathlib import Path
from unittest.mock import Mock

from mediaarchive.core.config import Config
from mediaarchive.core.errors import EngineError, InvalidRequestError, UpstreamError
from mediaarchive.core.orchestrator import TorrentOrchestrator, relative_to_root


def _config() -> Config:
    return Config(
        engine_url="http://127.0.0.1:8080",
        engine_username="admin",
        engine_password="pw",
        access_token="T",
        passkey="key",
        save_root=Path("/srv/media"),
    )


def _torrent(**overrides):
    row = {
        "name": "Foo.S01",
        "progress": 0.5,
        "size": 2048,
        "dlspeed": 100,
        "upspeed": 10,
        "eta": 60,
        "content_path": "/srv/media/42/Foo.S01",
        "hash": "aa11",
        "state": "downloading",
        "category": "",
    }
    row.update(overrides)
    return row


class TestRelativeToRoot(unittest.TestCase):
    def test_paths_under_root(self):
        root = Path("/srv/media")
        self.assertEqual(relative_to_root("/srv/media/42/Foo", root), "42/Foo")
        self.assertEqual(relative_to_root("/srv/media", root), "")

    def test_paths_outside_root_degrade_to_empty(self):
        root = Path("/srv/media")
        self.assertEqual(relative_to_root("/downloads/Foo", root), "")
        self.assertEqual(relative_to_root("/srv/media-old/Foo", root), "")
        self.assertEqual(relative_to_root("/srv/media/../etc", root), "")
        self.assertEqual(relative_to_root("", root), "")


class TestTorrentOrchestrator(unittest.TestCase):
    def setUp(self):
        self.engine = Mock()
        self.upstream = Mock()
        self.orch = TorrentOrchestrator(_config(), self.engine, self.upstream)

    def test_list_maps_views_in_engine_order(self):
        self.engine.list_torrents.return_value = [
            _torrent(name="B", hash="b", state="uploading"),
            _torrent(name="A", hash="a", state="pausedDL", content_path="/elsewhere/A"),
        ]
        views = self.orch.list_torrents()
        self.assertEqual([v.name for v in views], ["B", "A"])
        self.assertEqual([v.status for v in views], [0, 2])
        self.assertEqual(views[0].content_path, "42/Foo.S01")
        self.assertEqual(views[1].content_path, "")
        self.assertEqual(
            set(views[0].to_dict()),
            {"name", "progress", "size", "dlspeed", "upspeed", "eta", "content_path", "hash", "status"},
        )

    def test_list_missing_engine_field_is_engine_error(self):
        row = _torrent()
        del row["eta"]
        self.engine.list_torrents.return_value = [row]
        with self.assertRaises(EngineError):
            self.orch.list_torrents()

    def test_list_engine_failure_propagates(self):
        self.engine.list_torrents.side_effect = EngineError("Forbidden")
        with self.assertRaises(EngineError):
            self.orch.list_torrents()

    def test_add_fetches_then_adds_with_save_path(self):
        self.upstream.fetch_torrent.return_value = b"torrent"
        result = self.orch.add("42", "dh")
        self.assertEqual(result.to_dict(), {"status": "success", "message": ""})
        self.upstream.fetch_torrent.assert_called_once_with("42", "dh")
        self.engine.add_torrent.assert_called_once_with("42", b"torrent", str(Path("/srv/media") / "42"))

    def test_add_upstream_failure_skips_engine(self):
        self.upstream.fetch_torrent.side_effect = UpstreamError("Torrent download failed: 404")
        result = self.orch.add("42", "dh")
        self.assertEqual(result.status, "error")
        self.assertIn("404", result.message)
        self.engine.add_torrent.assert_not_called()

    def test_add_engine_rejection_returns_error_envelope(self):
        self.upstream.fetch_torrent.return_value = b"torrent"
        self.engine.add_torrent.side_effect = EngineError("Fails.")
        self.assertEqual(self.orch.add("42", "dh").to_dict(), {"status": "error", "message": "Fails."})

    def test_add_rejects_ids_that_are_not_numbers(self):
        for bad in ("../etc", "42/../../x", "", "abc", "\u0664\u0662", "\u00b2"):
            with self.assertRaises(InvalidRequestError):
                self.orch.add(bad, "dh")
        self.upstream.fetch_torrent.assert_not_called()

    def test_stop_success_and_error(self):
        self.assertTrue(self.orch.stop("aa11").ok)
        self.engine.delete_torrent.assert_called_once_with("aa11", delete_files=True)

        self.engine.delete_torrent.side_effect = EngineError("Not Found")
        self.assertEqual(self.orch.stop("ffff").to_dict(), {"status": "error", "message": "Not Found"})


if __name__ == "__main__":
    unittest.main()

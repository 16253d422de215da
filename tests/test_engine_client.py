import unittest
from pathlib import Path
from unittest.mock import Mock

from qbittorrentapi.exceptions import APIError

from mediaarchive.core.config import Config
from mediaarchive.core.errors import EngineError
from mediaarchive.services.engine_client import EngineClient


def _config() -> Config:
    return Config(
        engine_url="http://127.0.0.1:8080",
        engine_username="admin",
        engine_password="pw",
        access_token="T",
        passkey="key",
        save_root=Path("/srv/media"),
    )


class TestEngineClient(unittest.TestCase):
    def setUp(self):
        self.qb = Mock()
        self.engine = EngineClient(_config(), client=self.qb)

    def test_list_returns_plain_dicts(self):
        self.qb.torrents_info.return_value = [{"hash": "aa", "state": "uploading"}]
        self.assertEqual(self.engine.list_torrents(), [{"hash": "aa", "state": "uploading"}])

    def test_list_failure_raises(self):
        self.qb.torrents_info.side_effect = APIError("Forbidden")
        with self.assertRaises(EngineError):
            self.engine.list_torrents()

    def test_add_passes_layout_and_sequential_flags(self):
        self.qb.torrents_add.return_value = "Ok."
        self.engine.add_torrent("42", b"torrent-bytes", "/srv/media/42")
        kwargs = self.qb.torrents_add.call_args.kwargs
        self.assertEqual(kwargs["torrent_files"], {"42": b"torrent-bytes"})
        self.assertEqual(kwargs["save_path"], "/srv/media/42")
        self.assertTrue(kwargs["root_folder"])
        self.assertTrue(kwargs["is_sequential_download"])

    def test_add_fails_response_raises(self):
        self.qb.torrents_add.return_value = "Fails."
        with self.assertRaises(EngineError) as ctx:
            self.engine.add_torrent("42", b"x", "/srv/media/42")
        self.assertEqual(str(ctx.exception), "Fails.")

    def test_add_api_error_raises_with_text(self):
        self.qb.torrents_add.side_effect = APIError("Torrent file is not valid")
        with self.assertRaises(EngineError) as ctx:
            self.engine.add_torrent("42", b"x", "/srv/media/42")
        self.assertIn("not valid", str(ctx.exception))

    def test_delete_removes_data(self):
        self.engine.delete_torrent("abc123")
        self.qb.torrents_delete.assert_called_once_with(delete_files=True, torrent_hashes="abc123")


if __name__ == "__main__":
    unittest.main()

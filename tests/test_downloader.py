import httpx
import pytest

from changet.downloader import Downloader
from changet.errors import FilesystemError, NetworkError
from changet.models import DownloadTarget

URL = "https://i.4cdn.org/g/111.jpg"


class BrokenStream(httpx.SyncByteStream):
    def __iter__(self):
        yield b"partial"
        raise httpx.ReadError("connection reset")


def test_download_writes_exact_bytes(api, chan, tmp_path):
    chan.files[URL] = b"\x89PNG\r\n\x00\xff" * 1000
    target = DownloadTarget(tmp_path / "a.jpg", URL)
    assert Downloader(api).download(target) is True
    assert target.local_path.read_bytes() == chan.files[URL]


def test_second_download_is_noop(api, chan, tmp_path):
    chan.files[URL] = b"first"
    target = DownloadTarget(tmp_path / "a.jpg", URL)
    dl = Downloader(api)
    assert dl.download(target) is True
    chan.files[URL] = b"changed upstream"
    assert dl.download(target) is False
    assert chan.requests == [URL]
    assert target.local_path.read_bytes() == b"first"


def test_existing_file_skipped_regardless_of_content(api, chan, tmp_path):
    path = tmp_path / "a.jpg"
    path.write_bytes(b"")
    assert Downloader(api).download(DownloadTarget(path, URL)) is False
    assert chan.requests == []
    assert path.read_bytes() == b""


def test_directory_in_the_way(api, chan, tmp_path):
    (tmp_path / "a.jpg").mkdir()
    with pytest.raises(FilesystemError):
        Downloader(api).download(DownloadTarget(tmp_path / "a.jpg", URL))
    assert chan.requests == []


def test_uncreatable_path(api, chan, tmp_path):
    with pytest.raises(FilesystemError):
        Downloader(api).download(DownloadTarget(tmp_path / "missing" / "a.jpg", URL))
    assert chan.requests == []


def test_http_error_removes_file(api, chan, tmp_path):
    path = tmp_path / "a.jpg"
    with pytest.raises(NetworkError):
        Downloader(api).download(DownloadTarget(path, URL))
    assert not path.exists()


def test_broken_stream_removes_partial_file(tmp_path):
    from changet.api import FourChanAPI

    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, stream=BrokenStream())))
    path = tmp_path / "a.jpg"
    with FourChanAPI(client=client) as api:
        with pytest.raises(NetworkError):
            Downloader(api).download(DownloadTarget(path, URL))
    assert not path.exists()


class InterruptedStream(httpx.SyncByteStream):
    def __iter__(self):
        yield b"partial"
        raise KeyboardInterrupt


def test_interrupted_download_removes_partial_file(chan, tmp_path):
    from changet.api import FourChanAPI

    responses = iter([
        httpx.Response(200, stream=InterruptedStream()),
        httpx.Response(200, content=b"complete"),
    ])
    client = httpx.Client(transport=httpx.MockTransport(lambda r: next(responses)))
    target = DownloadTarget(tmp_path / "a.webm", URL)
    with FourChanAPI(client=client) as api:
        dl = Downloader(api)
        with pytest.raises(KeyboardInterrupt):
            dl.download(target)
        assert not target.local_path.exists()
        assert dl.download(target) is True
    assert target.local_path.read_bytes() == b"complete"


def test_losing_create_race_counts_as_skipped(api, chan, tmp_path, monkeypatch):
    path = tmp_path / "a.jpg"
    path.write_bytes(b"written by another worker")
    # the file appears between the existence check and the exclusive open
    monkeypatch.setattr(type(path), "is_file", lambda self: False)
    monkeypatch.setattr(type(path), "exists", lambda self: False)
    assert Downloader(api).download(DownloadTarget(path, URL)) is False
    monkeypatch.undo()
    assert chan.requests == []
    assert path.read_bytes() == b"written by another worker"

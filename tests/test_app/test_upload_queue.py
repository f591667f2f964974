"""Tests for the photo upload queue and uploaders."""
import threading
import time
from unittest.mock import patch, MagicMock

import pytest
import requests

from shared.enums import PhotoStatus
from shared.schemas import Photo

from field_ops.services.upload_queue import PhotoUploadQueue, SimulatedUploader, HttpUploader

from conftest import ImmediateUploader, FailingUploader


def _photo(photo_id='p-1', local_path='/tmp/p.jpg'):
    return Photo(id=photo_id, local_path=local_path, file_name='p.jpg')


class BlockingUploader:
    """Holds every upload until released."""

    def __init__(self):
        self.release = threading.Event()
        self.started = threading.Event()

    def __call__(self, photo, task_id, timeout=None):
        self.started.set()
        self.release.wait(5)
        return f"https://cdn.test/{photo.id}"


class FlakyUploader:
    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def __call__(self, photo, task_id, timeout=None):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError('dropped')
        return 'https://cdn.test/ok'


@pytest.fixture
def make_queue():
    queues = []

    def factory(uploader, **kwargs):
        options = dict(max_workers=2, timeout=5.0, max_retries=3, retry_delay=0)
        options.update(kwargs)
        queue = PhotoUploadQueue(uploader, **options)
        queues.append(queue)
        return queue

    yield factory
    for queue in queues:
        queue.shutdown(wait=True)


def test_successful_upload(make_queue):
    uploader = ImmediateUploader()
    queue = make_queue(uploader)
    assert queue.enqueue(_photo(), 'task-1')
    assert queue.wait_idle(5)

    results = queue.drain_results()
    assert len(results) == 1
    result = results[0]
    assert result.status == PhotoStatus.UPLOADED
    assert result.url == 'https://cdn.test/task-1/p-1'
    assert result.uploaded_at is not None
    assert result.attempts == 1
    assert queue.drain_results() == []


def test_uploads_run_concurrently(make_queue):
    uploader = ImmediateUploader()
    queue = make_queue(uploader, max_workers=4)
    for i in range(6):
        assert queue.enqueue(_photo(f'p-{i}'), 'task-1')
    assert queue.wait_idle(5)
    results = queue.drain_results()
    assert sorted(r.photo_id for r in results) == [f'p-{i}' for i in range(6)]
    assert queue.pending_ids() == []


def test_retry_then_success(make_queue):
    uploader = FlakyUploader(failures=2)
    queue = make_queue(uploader, max_retries=3)
    queue.enqueue(_photo(), 'task-1')
    assert queue.wait_idle(5)
    result = queue.drain_results()[0]
    assert result.status == PhotoStatus.UPLOADED
    assert result.attempts == 3


def test_exhausted_retries_fail(make_queue):
    uploader = FailingUploader()
    queue = make_queue(uploader, max_retries=2)
    queue.enqueue(_photo(), 'task-1')
    assert queue.wait_idle(5)
    result = queue.drain_results()[0]
    assert result.status == PhotoStatus.FAILED
    assert 'network unreachable' in result.error
    assert result.attempts == 2
    assert uploader.calls == 2


def test_exponential_backoff(make_queue):
    uploader = FailingUploader()
    queue = make_queue(uploader, max_retries=3, retry_delay=0.5)
    with patch('field_ops.services.upload_queue.time.sleep') as sleep:
        queue.enqueue(_photo(), 'task-1')
        assert queue.wait_idle(5)
    assert [c.args[0] for c in sleep.call_args_list] == [0.5, 1.0]


def test_unexpected_error_fails_without_retry(make_queue):
    uploader = FailingUploader(error=ValueError('bad photo'))
    queue = make_queue(uploader, max_retries=3)
    queue.enqueue(_photo(), 'task-1')
    assert queue.wait_idle(5)
    result = queue.drain_results()[0]
    assert result.status == PhotoStatus.FAILED
    assert result.error == 'bad photo'
    assert uploader.calls == 1


def test_attempt_timeout_is_enforced(make_queue):
    def stalled(photo, task_id, timeout=None):
        # Ignores its timeout argument
        time.sleep(1.0)
        return 'https://cdn.test/late'

    queue = make_queue(stalled, timeout=0.05, max_retries=2)
    started = time.monotonic()
    queue.enqueue(_photo(), 'task-1')
    assert queue.wait_idle(0.8)
    assert time.monotonic() - started < 0.8

    result = queue.drain_results()[0]
    assert result.status == PhotoStatus.FAILED
    assert 'exceeded 0.05s' in result.error
    assert result.attempts == 2


def test_photo_in_flight_is_not_enqueued_twice(make_queue):
    uploader = BlockingUploader()
    queue = make_queue(uploader)
    assert queue.enqueue(_photo(), 'task-1')
    assert not queue.enqueue(_photo(), 'task-1')
    assert queue.is_pending('p-1')
    uploader.release.set()
    assert queue.wait_idle(5)
    assert len(queue.drain_results()) == 1
    assert not queue.is_pending('p-1')


def test_cancelled_result_is_dropped(make_queue):
    uploader = BlockingUploader()
    queue = make_queue(uploader)
    queue.enqueue(_photo(), 'task-1')
    assert uploader.started.wait(5)
    assert queue.cancel('p-1')
    uploader.release.set()
    assert queue.wait_idle(5)
    assert queue.drain_results() == []
    assert not queue.cancel('p-1')


def test_wait_idle_times_out(make_queue):
    uploader = BlockingUploader()
    queue = make_queue(uploader)
    queue.enqueue(_photo(), 'task-1')
    assert not queue.wait_idle(0.05)
    uploader.release.set()
    assert queue.wait_idle(5)


def test_stopped_queue_refuses_uploads(make_queue):
    queue = make_queue(ImmediateUploader())
    queue.shutdown()
    assert not queue.enqueue(_photo(), 'task-1')


class TestSimulatedUploader:

    def test_returns_url_after_latency(self):
        uploader = SimulatedUploader(latency=0.01)
        start = time.monotonic()
        assert uploader(_photo(), 'task-1') == 'local://uploads/task-1/p-1'
        assert time.monotonic() - start >= 0.01

    def test_times_out(self):
        uploader = SimulatedUploader(latency=10)
        with patch('field_ops.services.upload_queue.time.sleep'):
            with pytest.raises(TimeoutError):
                uploader(_photo(), 'task-1', timeout=1)

    def test_failure_rate(self):
        uploader = SimulatedUploader(latency=0, failure_rate=1.0)
        with pytest.raises(ConnectionError):
            uploader(_photo(), 'task-1')


class TestHttpUploader:

    def test_posts_file(self, tmp_path):
        path = tmp_path / 'p.jpg'
        path.write_bytes(b'abc')
        response = MagicMock()
        response.json.return_value = {'url': 'https://cdn.test/p-1'}

        with patch('field_ops.services.upload_queue.requests.post', return_value=response) as post:
            url = HttpUploader('http://api.test/', timeout=7)(_photo(local_path=str(path)), 'task-1')

        assert url == 'https://cdn.test/p-1'
        args, kwargs = post.call_args
        assert args[0] == 'http://api.test/api/photos/upload'
        assert kwargs['data']['photo_id'] == 'p-1'
        assert kwargs['data']['task_id'] == 'task-1'
        assert len(kwargs['data']['hash_value']) == 64
        assert kwargs['timeout'] == 7
        assert 'file' in kwargs['files']
        response.raise_for_status.assert_called_once()

    def test_http_errors_are_retried_by_the_queue(self, tmp_path, make_queue):
        path = tmp_path / 'p.jpg'
        path.write_bytes(b'abc')
        with patch('field_ops.services.upload_queue.requests.post',
                   side_effect=requests.ConnectionError('refused')) as post:
            queue = make_queue(HttpUploader('http://api.test'), max_retries=2)
            queue.enqueue(_photo(local_path=str(path)), 'task-1')
            assert queue.wait_idle(5)
        result = queue.drain_results()[0]
        assert result.status == PhotoStatus.FAILED
        assert post.call_count == 2

    def test_missing_file_fails(self, make_queue):
        queue = make_queue(HttpUploader('http://api.test'), max_retries=1)
        queue.enqueue(_photo(local_path='/nonexistent/p.jpg'), 'task-1')
        assert queue.wait_idle(5)
        assert queue.drain_results()[0].status == PhotoStatus.FAILED

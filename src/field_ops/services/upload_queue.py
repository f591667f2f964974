"""Photo upload queue: background uploads with retry, polled by the session controller."""

import logging
import queue
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Dict, List

import requests

from shared.enums import PhotoStatus
from shared.schemas import UploadResult
from shared.utils import now, compute_photo_hash


class SimulatedUploader:
    """Stand-in uploader for offline use: waits a fixed latency, then succeeds.

    failure_rate > 0 makes a fraction of attempts raise ConnectionError.
    """

    def __init__(self, latency=2.0, failure_rate=0.0, base_url='local://uploads'):
        self.latency = latency
        self.failure_rate = failure_rate
        self.base_url = base_url

    def __call__(self, photo, task_id, timeout=None):
        if timeout is not None and self.latency > timeout:
            time.sleep(timeout)
            raise TimeoutError(f"Upload of {photo.id} timed out after {timeout}s")
        time.sleep(self.latency)
        if self.failure_rate and random.random() < self.failure_rate:
            raise ConnectionError(f"Simulated upload failure for {photo.id}")
        return f"{self.base_url}/{task_id}/{photo.id}"


class HttpUploader:
    """Uploads the photo file to the field ops API."""

    def __init__(self, base_url, timeout=30.0):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = logging.getLogger(self.__class__.__name__)

    def __call__(self, photo, task_id, timeout=None):
        url = f"{self.base_url}/api/photos/upload"
        data = {
            'photo_id': photo.id,
            'task_id': task_id,
            'hash_value': compute_photo_hash(photo.local_path),
        }
        with open(photo.local_path, 'rb') as f:
            response = requests.post(
                url,
                files={'file': (photo.file_name or f"{photo.id}.jpg", f, 'image/jpeg')},
                data=data,
                timeout=timeout or self.timeout,
            )
        response.raise_for_status()
        body = response.json()
        self.logger.debug(f"Uploaded {photo.id} to {url}")
        return body.get('url') or body.get('cloud_url')


class PhotoUploadQueue:
    """Runs uploads on a worker pool and posts UploadResults to a result queue.

    Workers never touch task state; the controller drains result_queue on its own
    thread. A photo id already in flight is refused, and results for cancelled ids
    are dropped.

    Each attempt runs the uploader on a separate attempt pool and waits at most
    `timeout` seconds for it, so an uploader that ignores its timeout argument
    fails the attempt instead of holding a worker. The abandoned call keeps its
    attempt thread until it returns.
    """

    def __init__(self, uploader, max_workers=4, timeout=30.0, max_retries=3, retry_delay=1.0):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.uploader = uploader
        self.max_workers = max_workers
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

        self.result_queue = queue.Queue()

        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._in_flight: Dict[str, str] = {}  # photo id -> task id
        self._futures = {}
        self._cancelled = set()

        self.executor = None
        self._attempt_executor = None
        self.running = False

        self.start()

    def start(self):
        """Start the worker pool."""
        if self.running:
            return
        self.executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix='photo-upload')
        self._attempt_executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix='photo-upload-attempt'
        )
        self.running = True
        self.logger.info("Photo upload queue started")

    def shutdown(self, wait=True):
        """Stop accepting uploads; with wait, block until running uploads finish."""
        if not self.running:
            return
        self.running = False
        with self._idle:
            self._cancelled.update(self._in_flight)
            # Uploads that never started are forgotten; they stay in-queue in the draft
            for photo_id, future in list(self._futures.items()):
                if future.cancel():
                    self._in_flight.pop(photo_id, None)
                    self._futures.pop(photo_id, None)
            self._idle.notify_all()
        self.executor.shutdown(wait=wait)
        self._attempt_executor.shutdown(wait=False)
        self.logger.info("Photo upload queue stopped")

    def enqueue(self, photo, task_id):
        """Submit a photo for upload. Returns False if it is already in flight."""
        if not self.running:
            self.logger.warning(f"Upload queue stopped; not uploading {photo.id}")
            return False
        with self._lock:
            if photo.id in self._in_flight:
                self.logger.debug(f"Photo {photo.id} already in flight")
                return False
            self._in_flight[photo.id] = task_id
            self._cancelled.discard(photo.id)
        future = self.executor.submit(self._process_upload, photo, task_id)
        with self._lock:
            if photo.id in self._in_flight:
                self._futures[photo.id] = future
        self.logger.debug(f"Queued upload of {photo.id} for task {task_id}")
        return True

    def cancel(self, photo_id):
        """Drop the result of an in-flight upload. Returns False if it was not in flight."""
        with self._lock:
            if photo_id not in self._in_flight:
                return False
            self._cancelled.add(photo_id)
        self.logger.debug(f"Cancelled upload of {photo_id}")
        return True

    def pending_ids(self) -> List[str]:
        with self._lock:
            return list(self._in_flight)

    def is_pending(self, photo_id):
        with self._lock:
            return photo_id in self._in_flight

    def wait_idle(self, timeout=None):
        """Block until nothing is in flight. Returns False on timeout."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._idle:
            while self._in_flight:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._idle.wait(remaining)
        return True

    def drain_results(self) -> List[UploadResult]:
        """Pop every result currently waiting, in completion order."""
        results = []
        try:
            while True:
                results.append(self.result_queue.get_nowait())
        except queue.Empty:
            pass
        return results

    def _is_cancelled(self, photo_id):
        with self._lock:
            return photo_id in self._cancelled

    def _process_upload(self, photo, task_id):
        """Worker body: attempt with exponential backoff, then post the outcome."""
        result = None
        try:
            result = self._attempt_upload(photo, task_id)
        except Exception as e:
            self.logger.error(f"Unexpected error uploading {photo.id}: {e}")
            result = UploadResult(photo_id=photo.id, task_id=task_id, status=PhotoStatus.FAILED, error=str(e))
        finally:
            with self._idle:
                self._in_flight.pop(photo.id, None)
                self._futures.pop(photo.id, None)
                cancelled = photo.id in self._cancelled
                self._cancelled.discard(photo.id)
                if result is not None and not cancelled:
                    self.result_queue.put(result)
                self._idle.notify_all()
            if cancelled:
                self.logger.debug(f"Dropped result for cancelled upload {photo.id}")

    def _call_uploader(self, photo, task_id):
        """One attempt, bounded by self.timeout whether or not the uploader honours it."""
        future = self._attempt_executor.submit(self.uploader, photo, task_id, timeout=self.timeout)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            raise TimeoutError(f"Upload of {photo.id} exceeded {self.timeout}s") from None

    def _attempt_upload(self, photo, task_id):
        last_exception = None
        attempts = 0
        for attempt in range(self.max_retries):
            if self._is_cancelled(photo.id):
                break
            attempts += 1
            try:
                url = self._call_uploader(photo, task_id)
                self.logger.info(f"Uploaded photo {photo.id} (attempt {attempts})")
                return UploadResult(
                    photo_id=photo.id,
                    task_id=task_id,
                    status=PhotoStatus.UPLOADED,
                    url=url,
                    uploaded_at=now(),
                    attempts=attempts,
                )
            except (requests.RequestException, OSError, TimeoutError) as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    self.logger.warning(f"Upload of {photo.id} failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                    time.sleep(self.retry_delay * (2 ** attempt))  # Exponential backoff
                else:
                    self.logger.error(f"Upload of {photo.id} failed after {self.max_retries} attempts: {e}")

        return UploadResult(
            photo_id=photo.id,
            task_id=task_id,
            status=PhotoStatus.FAILED,
            error=str(last_exception) if last_exception else 'Upload cancelled',
            attempts=attempts,
        )

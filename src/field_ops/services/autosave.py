"""Periodic autosave timer."""
import logging
import threading


class AutosaveTimer:
    """Calls `callback` every `interval` seconds on a daemon timer thread until stopped.

    Each tick re-arms a fresh threading.Timer; a failing callback is logged and
    the timer keeps running.
    """

    def __init__(self, interval, callback, name='autosave'):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.interval = interval
        self.callback = callback
        self.name = name
        self._timer = None
        self._lock = threading.Lock()
        self.running = False

    def start(self):
        with self._lock:
            if self.running:
                return
            self.running = True
            self._arm()
        self.logger.debug(f"Autosave started ({self.interval}s)")

    def stop(self):
        with self._lock:
            self.running = False
            if self._timer:
                self._timer.cancel()
                self._timer = None

    def _arm(self):
        self._timer = threading.Timer(self.interval, self._tick)
        self._timer.name = self.name
        self._timer.daemon = True
        self._timer.start()

    def _tick(self):
        if not self.running:
            return
        try:
            self.callback()
        except Exception as e:
            self.logger.error(f"Autosave failed: {e}")
        with self._lock:
            if self.running:
                self._arm()

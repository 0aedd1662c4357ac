# -*- encoding: utf-8 -*-
# @File   : logger.py
# @Time   : 2024/10/12 23:31:09
# @Author : Kariko Lin

"""A simple console/file log sink.

Make one per process and hand it to whoever needs to log:

```python
log = Logger('/path/to/client', 'client.log', write_log_file=True)
log.log('Loaded {0} sections.', 12)
```

File lines look like `19.10. 14:03:59.127    Loaded 12 sections.`,
while console lines are just the message.
Failures of the file sink never reach the caller.
"""

import logging
import sys
from datetime import datetime
from threading import Lock

from .safepath import combine


class _TimestampFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__('%(asctime)s    %(message)s')

    def formatTime(
        self, record: logging.LogRecord, datefmt: str | None = None
    ) -> str:
        created = datetime.fromtimestamp(record.created)
        return created.strftime('%d.%m. %H:%M:%S.') + '%03d' % record.msecs


class Logger:
    def __init__(
        self,
        log_path: str | None = None,
        log_file_name: str | None = None, *,
        write_to_console: bool = False,
        write_log_file: bool = False
    ) -> None:
        self.log_path = log_path
        self.log_file_name = log_file_name
        self.write_to_console = write_to_console
        self.write_log_file = write_log_file
        self._lock = Lock()
        self._console = logging.StreamHandler(sys.stdout)
        self._console.setFormatter(logging.Formatter('%(message)s'))
        self._files: dict[str, logging.FileHandler] = {}

    def _file_handler(self, file_name: str | None) -> logging.Handler | None:
        file_name = file_name or self.log_file_name
        if not file_name:
            return None
        path = combine(self.log_path, file_name)
        if (handler := self._files.get(path)) is None:
            handler = logging.FileHandler(
                path, mode='a', encoding='utf-8', delay=True)
            handler.setFormatter(_TimestampFormatter())
            self._files[path] = handler
        return handler

    def _emit(
        self, message: str, file_name: str | None,
        console: bool, file: bool
    ) -> None:
        record = logging.makeLogRecord(
            {'msg': message, 'levelno': logging.INFO, 'levelname': 'INFO'})
        with self._lock:
            if console:
                self._console.handle(record)
            if file and (handler := self._file_handler(file_name)):
                handler.handle(record)

    def log(self, data: str, *args: object, file_name: str | None = None):
        """Log to the enabled sinks.

        `args` fill `str.format` placeholders in `data`, like `{0}`.
        `file_name` overrides the default log file, within `log_path`.
        """
        message = data.format(*args) if args else data
        self._emit(
            message, file_name, self.write_to_console, self.write_log_file)

    def force_log(self, data: str, file_name: str | None = None):
        """Log to both console and file, whatever the switches say."""
        self._emit(data, file_name, True, True)

    def close(self) -> None:
        with self._lock:
            for i in self._files.values():
                i.close()
            self._files.clear()

# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""StructlogAdapter — default LoggingPort implementation using structlog.

Output goes through a single handler on the ``dynparam`` logger. The root
logger and the host's handlers are left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from dynparam.core.config import Config
from dynparam.kernel.exceptions import InvalidArgumentException
from dynparam.logging.port import NAMESPACE

_HANDLER_MARK = "_dynparam_handler"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


class StructlogAdapter:
    """Default logging adapter backed by structlog.

    Config keys (``dynparam.logging.*``):

    ``level``
        Logger name to level. ``dynparam`` sets the namespace level
        (default ``INFO``); other keys must be loggers inside the namespace.
    ``format``
        ``console`` (default) or ``json``.
    ``propagate``
        Whether records also reach the host's handlers (default ``false``).
    """

    def __init__(self) -> None:
        self._level: str = "INFO"
        self._format: str = "console"
        self._propagate: bool = False
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        """Configure the ``dynparam`` namespace from config."""
        level_section = dict(config.get_section("dynparam.logging.level"))
        self._level = str(level_section.pop(NAMESPACE, "INFO")).upper()
        outside = [name for name in level_section if not name.startswith(f"{NAMESPACE}.")]
        if outside:
            raise InvalidArgumentException(
                f"Log levels can only be set inside the '{NAMESPACE}' namespace: {', '.join(outside)}",
                context={"loggers": outside},
            )
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("dynparam.logging.format", "console")).lower()
        propagate = config.get("dynparam.logging.propagate", False)
        self._propagate = propagate if isinstance(propagate, bool) else str(propagate).lower() in ("true", "1", "yes")

        self._setup_structlog()
        self._install_handler()
        self._apply_levels()

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)

    def reset(self) -> None:
        """Remove the handler this adapter installed and restore propagation."""
        namespace_logger = logging.getLogger(NAMESPACE)
        for handler in list(namespace_logger.handlers):
            if getattr(handler, _HANDLER_MARK, False):
                namespace_logger.removeHandler(handler)
        namespace_logger.propagate = True
        namespace_logger.setLevel(logging.NOTSET)

    def _setup_structlog(self) -> None:
        """Route structlog through stdlib, unless the host already configured it."""
        if structlog.is_configured():
            return
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *_SHARED_PROCESSORS,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _install_handler(self) -> None:
        """Attach one rendering handler to the ``dynparam`` logger."""
        renderer: structlog.types.Processor
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(colors=False)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
                foreign_pre_chain=_SHARED_PROCESSORS,
            )
        )
        setattr(handler, _HANDLER_MARK, True)

        self.reset()
        namespace_logger = logging.getLogger(NAMESPACE)
        namespace_logger.addHandler(handler)
        namespace_logger.propagate = self._propagate
        namespace_logger.setLevel(getattr(logging, self._level, logging.INFO))

    def _apply_levels(self) -> None:
        """Apply per-module log levels."""
        for module, level in self._module_levels.items():
            self.set_level(module, level)

"""TRACE logging level for maskedit.

Levels used by the package:
    TRACE   =  5  — raw evdev events (input.keyboard_host), text/key events
                    entering handlers.edit_controller, every committed
                    buffer change in core.engine
    DEBUG   = 10  — engine and filter rejections, mask compiles, engine
                    rebuilds in core.cache, overtype toggles
    INFO    = 20  — field reconfiguration (on_config_changed)
    WARNING = 30  — unreadable or invalid config files

Import this module once (the engine, controller and host do) before calling
``logger.trace(...)``.
"""

import logging

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


# Patched onto Logger at import; every maskedit logger gains .trace()
logging.Logger.trace = _trace  # type: ignore[attr-defined]

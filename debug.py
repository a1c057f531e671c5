# debug.py
from __future__ import annotations
import logging
from typing import Dict

COMPONENTS = (
    "alphabet",
    "permutation",
    "rotor",
    "stepping",
    "plugboard",
    "machine",
    "config",
)


class Debug:
    _root_configured: bool = False          # class-level guard

    # switch state is shared so one toggle reaches every module
    _components: Dict[str, bool] = {c: False for c in COMPONENTS}
    _enabled: bool = True

    def __init__(self, *, log_to: str | None = None) -> None:
        """
        If `log_to` is given, messages also stream to that file.
        Multiple Debug() instances share the same root logger config
        and the same component switches.
        """
        if not Debug._root_configured:
            handlers: list[logging.Handler] = [logging.StreamHandler()]
            if log_to:
                handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

            logging.basicConfig(
                level=logging.DEBUG,
                format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                handlers=handlers,
            )
            Debug._root_configured = True
        elif log_to:
            handler = logging.FileHandler(log_to, encoding="utf-8")
            handler.setFormatter(logging.Formatter(
                "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            logging.getLogger().addHandler(handler)

        self.logger = logging.getLogger("ROTORBOX")
        self.components = Debug._components

    # ── logging API ──────────────────────────────────────────────
    @property
    def enabled(self) -> bool:
        return Debug._enabled

    def log(self, component: str, message: str) -> None:
        if Debug._enabled and self.components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def warn(self, component: str, message: str) -> None:
        """Warnings bypass the component switches."""
        self.logger.warning("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        self.components[component] = not self.components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        Debug._enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug enabled={self.enabled} active={active}>"

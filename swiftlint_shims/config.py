"""
swiftlint_shims/config.py
═════════════════════════

Rule and project configuration.

Two layers:

  1. **Rule configuration objects** — what a single rule is parameterized
     by.  ``SeverityConfiguration`` is one severity; ``SeverityLevelsConfiguration``
     is a warning threshold plus an optional error threshold.  Both accept the
     loosely typed values found in a YAML file through ``apply()``.

  2. **Project configuration** — a ``.swiftlint.yml`` file::

         disabled_rules:
           - line_length
         opt_in_rules:
           - object_literal
         included:
           - Sources
         excluded:
           - Sources/Generated
         cyclomatic_complexity:
           warning: 8
           error: 15
         line_length: [100, 160]
         reporter: json

     which resolves into a list of configured rule instances.

Errors in either layer raise :class:`~swiftlint_shims.errors.ConfigurationError`.

Depends on:
    - PyYAML (``yaml.safe_load``)
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

import yaml

from .diagnostics import SeverityThreshold, ViolationSeverity
from .errors import ConfigurationError

if TYPE_CHECKING:
    from .checkers import Rule, RuleRegistry

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = ".swiftlint.yml"
REPORTERS = ("xcode", "json", "summary")

_PROJECT_KEYS = frozenset({
    "disabled_rules",
    "opt_in_rules",
    "whitelist_rules",
    "included",
    "excluded",
    "reporter",
})


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — RULE CONFIGURATIONS
# ═════════════════════════════════════════════════════════════════════════

def _parse_severity(raw: Any) -> ViolationSeverity:
    try:
        return ViolationSeverity.parse(raw)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def _parse_threshold(raw: Any, what: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigurationError(f"{what} threshold must be an integer, got {raw!r}")
    if raw < 0:
        raise ConfigurationError(f"{what} threshold must be >= 0, got {raw}")
    return raw


@dataclass
class SeverityConfiguration:
    """A single configurable severity (``warning`` by default)."""
    severity: ViolationSeverity = ViolationSeverity.WARNING

    def apply(self, raw: Any) -> None:
        """Accept ``"error"`` or ``{"severity": "error"}``."""
        if isinstance(raw, Mapping):
            if "severity" not in raw:
                raise ConfigurationError("expected a 'severity' key")
            raw = raw["severity"]
        self.severity = _parse_severity(raw)

    @property
    def console_description(self) -> str:
        return self.severity.value


@dataclass
class SeverityLevelsConfiguration:
    """
    A warning threshold and an optional error threshold.

    ``apply`` accepts:

      - ``12``                          → warning 12, no error threshold
      - ``[12, 20]``                    → warning 12, error 20
      - ``{"warning": 12, "error": 20}`` → same; a missing ``warning`` keeps
        the current value, a missing ``error`` clears it
    """
    warning: int
    error: Optional[int] = None

    def apply(self, raw: Any) -> None:
        if isinstance(raw, list):
            if not raw:
                raise ConfigurationError("threshold list must not be empty")
            self.warning = _parse_threshold(raw[0], "warning")
            self.error = _parse_threshold(raw[1], "error") if len(raw) > 1 else None
        elif isinstance(raw, Mapping):
            unknown = set(raw) - {"warning", "error"}
            if unknown:
                raise ConfigurationError(
                    f"unknown threshold keys: {', '.join(sorted(map(str, unknown)))}"
                )
            if "warning" in raw:
                self.warning = _parse_threshold(raw["warning"], "warning")
            error = raw.get("error")
            self.error = None if error is None else _parse_threshold(error, "error")
        else:
            self.warning = _parse_threshold(raw, "warning")
            self.error = None

    @property
    def params(self) -> List[SeverityThreshold]:
        """Thresholds in evaluation order: error first, then warning."""
        params: List[SeverityThreshold] = []
        if self.error is not None:
            params.append(SeverityThreshold(self.error, ViolationSeverity.ERROR))
        params.append(SeverityThreshold(self.warning, ViolationSeverity.WARNING))
        return params

    @property
    def console_description(self) -> str:
        text = f"warning: {self.warning}"
        if self.error is not None:
            text += f", error: {self.error}"
        return text


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — PROJECT CONFIGURATION
# ═════════════════════════════════════════════════════════════════════════

def _string_list(data: Mapping[str, Any], key: str) -> List[str]:
    value = data.get(key, [])
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"'{key}' must be a list of strings")
    return list(value)


def _reporter(data: Mapping[str, Any]) -> Optional[str]:
    value = data.get("reporter")
    if value is None:
        return None
    if value not in REPORTERS:
        raise ConfigurationError(
            f"'reporter' must be one of {', '.join(REPORTERS)}, got {value!r}"
        )
    return value


@dataclass
class Configuration:
    """
    Project-level configuration.

    Attributes
    ----------
    disabled_rules  : default rules to turn off
    opt_in_rules    : opt-in rules to turn on
    whitelist_rules : if non-empty, exactly these rules run
    included        : paths to lint (relative to ``root``)
    excluded        : paths or glob patterns to skip
    reporter        : default output format for the CLI, one of ``REPORTERS``
    rule_options    : per-rule raw configuration keyed by identifier
    root            : directory relative paths are resolved against
    """
    disabled_rules: List[str] = field(default_factory=list)
    opt_in_rules: List[str] = field(default_factory=list)
    whitelist_rules: List[str] = field(default_factory=list)
    included: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    reporter: Optional[str] = None
    rule_options: Dict[str, Any] = field(default_factory=dict)
    root: Path = field(default_factory=Path)

    @classmethod
    def from_dict(
        cls, data: Optional[Mapping[str, Any]], root: Optional[Path] = None
    ) -> "Configuration":
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError("configuration must be a mapping")
        config = cls(
            disabled_rules=_string_list(data, "disabled_rules"),
            opt_in_rules=_string_list(data, "opt_in_rules"),
            whitelist_rules=_string_list(data, "whitelist_rules"),
            included=_string_list(data, "included"),
            excluded=_string_list(data, "excluded"),
            reporter=_reporter(data),
            rule_options={
                str(key): value for key, value in data.items()
                if key not in _PROJECT_KEYS
            },
            root=root if root is not None else Path("."),
        )
        if config.whitelist_rules and (config.disabled_rules or config.opt_in_rules):
            raise ConfigurationError(
                "'whitelist_rules' cannot be combined with "
                "'disabled_rules' or 'opt_in_rules'"
            )
        return config

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Configuration":
        """Load a ``.swiftlint.yml`` file."""
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"cannot load {path}: {exc}") from exc
        logger.debug("loaded configuration from %s", path)
        return cls.from_dict(data, root=path.parent)

    @classmethod
    def discover(cls, directory: Union[str, Path] = ".") -> "Configuration":
        """Load ``.swiftlint.yml`` from ``directory`` if present, else defaults."""
        candidate = Path(directory) / DEFAULT_CONFIG_FILENAME
        if candidate.is_file():
            return cls.from_file(candidate)
        return cls(root=Path(directory))

    # ── rule selection ──────────────────────────────────────────────

    def configured_rules(self, registry: "RuleRegistry") -> List["Rule"]:
        """Instantiate and configure the rules this configuration enables."""
        known = set(registry.identifiers)
        for identifier in (
            self.disabled_rules + self.opt_in_rules + self.whitelist_rules
        ):
            if identifier not in known:
                logger.warning("configuration references unknown rule '%s'", identifier)
        for key in self.rule_options:
            if key not in known:
                logger.warning("ignoring unknown configuration key '%s'", key)

        rules: List["Rule"] = []
        for rule_cls in registry.get_enabled():
            identifier = rule_cls.description.identifier
            if self.whitelist_rules:
                if identifier not in self.whitelist_rules:
                    continue
            elif identifier in self.disabled_rules:
                continue
            elif rule_cls.opt_in and identifier not in self.opt_in_rules:
                continue
            rule = rule_cls()
            if identifier in self.rule_options:
                rule.configure(self.rule_options[identifier])
            rules.append(rule)
        return rules

    # ── path filtering ──────────────────────────────────────────────

    def _resolve(self, pattern: str) -> str:
        return str(self.root / pattern)

    def is_excluded(self, path: Union[str, Path]) -> bool:
        """
        True if ``path`` lies under (or matches) an ``excluded`` entry.

        Both sides are compared as absolute paths, so ``.`` and the
        project's absolute path exclude the same files.
        """
        path = Path(path).resolve()
        text = str(path)
        for pattern in self.excluded:
            resolved = (self.root / pattern).resolve()
            if fnmatch.fnmatch(text, str(resolved)):
                return True
            if path == resolved or resolved in path.parents:
                return True
        return False

    def lint_roots(self, paths: List[str]) -> List[Path]:
        """Paths given on the command line, else ``included``, else the root."""
        if paths:
            return [Path(p) for p in paths]
        if self.included:
            return [Path(self._resolve(p)) for p in self.included]
        return [self.root]


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "REPORTERS",
    "SeverityConfiguration",
    "SeverityLevelsConfiguration",
    "Configuration",
]

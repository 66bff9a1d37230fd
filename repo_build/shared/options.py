"""Option parsing and layered merging shared by every tool wrapper.

Each wrapper describes the options it intercepts with :class:`OptionSpec`
entries. Everything else in the argument vector is forwarded to the tool
unchanged. The final option set is produced by :func:`merge_options`, which
layers built-in defaults, config-file presence and explicit flags so that a
later layer always wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, Mapping, Sequence

from .errors import ArgumentError
from .paths import BUILTIN_CONFIG_DIR, ResolvedPaths


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """An option a wrapper intercepts, under all of its spellings."""

    key: str
    flags: tuple[str, ...]
    takes_value: bool = True

    def match(self, token: str) -> str | None:
        """Return the flag spelling ``token`` uses, or None."""
        for flag in self.flags:
            if token == flag:
                return flag
            if flag.startswith("--") and token.startswith(flag + "="):
                return flag
        return None


@dataclass(frozen=True, slots=True)
class Shorthand:
    """A positional argument accepted as sugar for a value option."""

    key: str
    flag: str
    matches: Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class Option:
    """A single resolved option, rendered exactly as ``tokens``."""

    key: str
    tokens: tuple[str, ...]
    value: str | bool = True

    @classmethod
    def flag(cls, key: str, name: str, value: str | None = None) -> Option:
        if value is None:
            return cls(key, (name,), True)
        return cls(key, (name, value), value)


ToolOptions = dict[str, Option]


@dataclass(frozen=True, slots=True)
class ParsedInvocation:
    """An argument vector split into intercepted options and pass-through."""

    options: ToolOptions
    passthrough: tuple[str, ...]

    def has(self, *keys: str) -> bool:
        return any(key in self.options for key in keys)

    def value(self, key: str) -> str | bool | None:
        option = self.options.get(key)
        return option.value if option is not None else None


def parse_invocation(
    argv: Sequence[str],
    specs: Iterable[OptionSpec],
    *,
    tool: str | None = None,
    shorthand: Shorthand | None = None,
) -> ParsedInvocation:
    """Split ``argv`` into known options and pass-through tokens.

    Short and long spellings of an option share one key. When an option
    appears more than once the later occurrence wins, and it takes the
    position of that later occurrence.

    Raises:
        ArgumentError: If a value option is the last token.
    """
    specs = tuple(specs)
    options: ToolOptions = {}
    passthrough: list[str] = []
    seen_positional = False

    tokens = iter(argv)
    for token in tokens:
        spec, flag = _find_spec(specs, token)
        if spec is None:
            if shorthand is not None and not seen_positional and not token.startswith("-"):
                seen_positional = True
                if shorthand.matches(token):
                    _set(options, Option.flag(shorthand.key, shorthand.flag, token))
                    continue
            passthrough.append(token)
            continue

        if token != flag:
            # --flag=value
            _set(options, Option(spec.key, (token,), token[len(flag) + 1 :]))
        elif spec.takes_value:
            value = next(tokens, None)
            if value is None:
                raise ArgumentError("expects a value", tool, flag)
            _set(options, Option(spec.key, (token, value), value))
        else:
            _set(options, Option(spec.key, (token,), True))

    return ParsedInvocation(options=options, passthrough=tuple(passthrough))


def _find_spec(
    specs: tuple[OptionSpec, ...], token: str
) -> tuple[OptionSpec | None, str | None]:
    for spec in specs:
        flag = spec.match(token)
        if flag is not None:
            return spec, flag
    return None, None


def _set(options: ToolOptions, option: Option) -> None:
    options.pop(option.key, None)
    options[option.key] = option


def merge_options(*layers: Mapping[str, Option | None]) -> ToolOptions:
    """Merge option layers, later layers overriding earlier ones.

    An overriding option moves to the end so that explicit flags render in
    the order the user gave them. A ``None`` value drops the key.
    """
    merged: ToolOptions = {}
    for layer in layers:
        for key, option in layer.items():
            merged.pop(key, None)
            if option is not None:
                merged[key] = option
    return merged


def render_options(options: Mapping[str, Option]) -> list[str]:
    """Flatten merged options into argv tokens."""
    argv: list[str] = []
    for option in options.values():
        argv.extend(option.tokens)
    return argv


def _config_candidates(
    paths: ResolvedPaths,
    names: Sequence[str],
    *,
    include_root: bool,
    include_builtin: bool,
) -> Iterator[Path]:
    yield from (paths.package_file(name) for name in names)
    if include_root and paths.monorepo_root is not None:
        yield from (paths.monorepo_root / name for name in names)
    if include_builtin:
        yield from (BUILTIN_CONFIG_DIR / name for name in names)


def find_config_file(
    paths: ResolvedPaths,
    *names: str,
    include_root: bool = True,
    include_builtin: bool = True,
) -> Path | None:
    """Find the first existing config file.

    Lookup order is the package directory, then the monorepo root, then the
    built-in config directory. Within each directory ``names`` are tried in
    order, so ``find_config_file(paths, "tsconfig.build.json", "tsconfig.json")``
    prefers the build-specific file.
    """
    for candidate in _config_candidates(
        paths, names, include_root=include_root, include_builtin=include_builtin
    ):
        if candidate.is_file():
            return candidate
    return None

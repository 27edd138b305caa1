"""Values derived from the reference (Homebrew/brew) checkout."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from yaml.composer import ComposerError
from yaml.constructor import ConstructorError

PORTABLE_RUBY_VERSION_PATH = "Library/Homebrew/vendor/portable-ruby-version"
RUBOCOP_CONFIG_PATH = "Library/.rubocop.yml"

# Only `require` is anchored; the other alternatives match anywhere in the key.
EXCLUDED_KEY_PATTERN = re.compile(
    r"\Arequire|inherit_from|inherit_mode|Cask/|Formula|Homebrew|Performance/|RSpec|Sorbet/"
)
BUILD_SUFFIX_PATTERN = re.compile(r"_\d+$")

RUBY_REGEXP_TAG = "!ruby/regexp"


@dataclass(frozen=True)
class RubyRegexp:
    """A Ruby regexp literal kept as its source text, e.g. ``/\\.rb$/i``."""

    source: str


class RubocopLoader(yaml.SafeLoader):
    """Loader accepting plain data, Ruby symbols and Ruby regexps only.

    Timestamps, aliases and any tag without a safe constructor are
    rejected.
    """

    def compose_node(self, parent, index):
        if self.check_event(yaml.AliasEvent):
            event = self.peek_event()
            raise ComposerError(
                None, None,
                f"aliases are not allowed (alias *{event.anchor})",
                event.start_mark,
            )
        return super().compose_node(parent, index)


def _construct_regexp(loader: RubocopLoader, node: yaml.Node) -> RubyRegexp:
    return RubyRegexp(loader.construct_scalar(node))


def _reject_timestamp(loader: RubocopLoader, node: yaml.Node) -> Any:
    raise ConstructorError(
        None, None,
        f"disallowed type: timestamp {node.value!r}",
        node.start_mark,
    )


RubocopLoader.add_constructor(RUBY_REGEXP_TAG, _construct_regexp)
RubocopLoader.add_constructor("tag:yaml.org,2002:timestamp", _reject_timestamp)


class RubocopDumper(yaml.SafeDumper):
    """Dumper that writes Ruby regexps back with their original tag."""


def _represent_regexp(dumper: RubocopDumper, data: RubyRegexp) -> yaml.Node:
    return dumper.represent_scalar(RUBY_REGEXP_TAG, data.source)


RubocopDumper.add_representer(RubyRegexp, _represent_regexp)


def read_ruby_version(reference_path: Path) -> str:
    """Read the portable Ruby version, without its ``_<build>`` suffix."""
    raw = (reference_path / PORTABLE_RUBY_VERSION_PATH).read_text()
    return BUILD_SUFFIX_PATTERN.sub("", raw.rstrip(), count=1)


def load_rubocop_config(config_path: Path) -> dict[str, Any]:
    """Parse a RuboCop config with the restricted loader."""
    with open(config_path) as f:
        data = yaml.load(f, Loader=RubocopLoader)

    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping at the top level")
    return data


def filter_rubocop_config(config: dict[str, Any]) -> dict[str, Any]:
    """Drop top-level keys that only make sense inside Homebrew/brew."""
    return {
        key: value
        for key, value in config.items()
        if not EXCLUDED_KEY_PATTERN.search(key)
    }


def dump_rubocop_config(config: dict[str, Any]) -> str:
    """Serialize a config mapping in its original key order."""
    return yaml.dump(
        config,
        Dumper=RubocopDumper,
        explicit_start=True,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=1000,
    )


def render_rubocop_config(reference_path: Path, header: str) -> str:
    """Build the text written to a target repository's .rubocop.yml."""
    config = load_rubocop_config(reference_path / RUBOCOP_CONFIG_PATH)
    body = dump_rubocop_config(filter_rubocop_config(config))
    return f"{header}\n{body}\n"


@dataclass(frozen=True)
class ReferenceValues:
    """Content derived from the reference tree for the computed files."""

    ruby_version: str
    rubocop_config: str

    @classmethod
    def derive(cls, reference_path: Path, header: str) -> "ReferenceValues":
        """Read both derived values; any read or parse error propagates."""
        return cls(
            ruby_version=read_ruby_version(reference_path),
            rubocop_config=render_rubocop_config(reference_path, header),
        )

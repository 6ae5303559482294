"""
Generator configuration

A BindingPolicy is the fixed allow/block policy for one binding artifact. It
becomes a GeneratorConfig once discovery has produced the include paths.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class BindingPolicy:
    """Fixed policy for one generated artifact"""
    header: str
    output: str
    cpp: bool = False
    allowlist_functions: tuple[str, ...] = ()
    blocklist_types: tuple[str, ...] = ()
    native_enums: tuple[str, ...] = ()
    blocklist_items: tuple[str, ...] = ()
    strip_token: str = ''
    namespace: str = ''


@dataclass(frozen=True)
class GeneratorConfig:
    """Everything a generator needs for a single run"""
    policy: BindingPolicy
    header_path: str
    extra_include_dirs: tuple[str, ...]

    @classmethod
    def build(cls, policy: BindingPolicy, include_paths: list[str],
              header_dir: Optional[str] = None) -> 'GeneratorConfig':
        header = Path(policy.header)
        if header_dir is not None and not header.is_absolute():
            header = Path(header_dir) / header
        return cls(policy, str(header), tuple(include_paths))

    def allows_function(self, name: str) -> bool:
        return any(re.match(p, name) for p in self.policy.allowlist_functions)

    def blocks_item(self, name: str) -> bool:
        return any(re.match(p, name) for p in self.policy.blocklist_items)

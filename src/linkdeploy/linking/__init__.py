"""Linking of library addresses into contract creation bytecode."""

from __future__ import annotations

from linkdeploy.linking.artifact import BytecodeArtifact, LinkReference, ResolvedArtifact
from linkdeploy.linking.linker import apply_link, assert_fully_linked, link_libraries
from linkdeploy.linking.templates import load_template

__all__ = [
    "BytecodeArtifact",
    "LinkReference",
    "ResolvedArtifact",
    "apply_link",
    "assert_fully_linked",
    "link_libraries",
    "load_template",
]

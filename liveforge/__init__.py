"""
Liveforge - LiveView resource generator for Phoenix applications

Scaffolds the context, schema, LiveViews, templates and tests for a
resource into an existing Phoenix project.
"""

__version__ = "0.1.0"

from liveforge.spec import Attribute, AttributeKind, Context, Schema, build_resource
from liveforge.generator import LiveGenerator, generate_live

__all__ = [
    "Attribute",
    "AttributeKind",
    "Context",
    "Schema",
    "build_resource",
    "LiveGenerator",
    "generate_live",
]

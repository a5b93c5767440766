"""synlint - Static analysis for exported data-orchestration workspace templates.

synlint reads a workspace template (pipelines, activities, datasets, linked
services, data flows and triggers), builds the resource dependency graph and
reports structural, hygiene and correctness findings without executing anything.
"""

__version__ = "0.1.0"
__author__ = "synlint maintainers"
__description__ = "Static analysis for exported data-orchestration workspace templates"

from synlint.config import SynlintConfig

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "SynlintConfig",
]

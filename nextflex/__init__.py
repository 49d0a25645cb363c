"""nextflex -- interactive Next.js project scaffolder.

Collects data-layer, AI provider and service-style preferences, then builds a
pre-wired Next.js skeleton by running ``create-next-app``, installing the
matching npm packages and rendering template source files into the tree.

Quick usage::

    from nextflex.config import ScaffoldConfig, ToolSettings
    from nextflex.scaffolder import ProjectGenerator

    config = ScaffoldConfig(project_name="demo", use_react_query=True)
    result = await ProjectGenerator(config, ToolSettings()).generate(".")
"""

__version__ = "1.0.0"

__all__ = ["__version__"]

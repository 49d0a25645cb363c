"""nextflex scaffolder -- builds the project tree from a resolved config.

Quick usage::

    from nextflex.config import ScaffoldConfig, ToolSettings
    from nextflex.scaffolder import ProjectGenerator

    config = ScaffoldConfig(project_name="demo", use_zustand=True, ai_choice="claude")
    generator = ProjectGenerator(config, ToolSettings(package_manager="npm"))
    result = await generator.generate("/tmp/output")
"""

from nextflex.scaffolder.dispatcher import TemplateDispatcher, TemplateSpec, select_templates
from nextflex.scaffolder.generator import GenerationResult, ProjectGenerator
from nextflex.scaffolder.installer import DependencyInstaller, compute_dependencies
from nextflex.scaffolder.materializer import ProjectMaterializer, required_directories
from nextflex.scaffolder.templates import TemplateRenderer

__all__ = [
    "DependencyInstaller",
    "GenerationResult",
    "ProjectGenerator",
    "ProjectMaterializer",
    "TemplateDispatcher",
    "TemplateRenderer",
    "TemplateSpec",
    "compute_dependencies",
    "required_directories",
    "select_templates",
]

"""
Face Template Migration - Converts legacy face templates to normalized vectors
"""

__version__ = "1.0.0"

from .migration import FaceTemplate, FaceTemplateMigration
from .versions import TemplateVersion

__all__ = ["FaceTemplate", "FaceTemplateMigration", "TemplateVersion"]

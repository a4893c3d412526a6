"""
Registro de la Propiedad — certificate request form service

Packages:
    api/        HTTP routes and error translation
    forms/      Field maps, validation and PDF overlay rendering
    core/       Shared configuration, paths, security and startup checks
"""

__version__ = "1.0.0"

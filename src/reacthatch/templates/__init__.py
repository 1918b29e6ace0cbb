"""
reacthatch.templates - Jinja2 Template Files
============================================

This package contains the Jinja2 templates for the files reacthatch writes
into a freshly generated Vite project. Templates use the .j2 extension and
are rendered by the generator module.

Template Naming Convention
--------------------------
- Templates end with `.j2` extension
- Output filename = template name without `.j2`; the output directory is
  set in ``generator.TEMPLATE_MAPPINGS``

Available Templates
-------------------
Styling and build:
    - index.css.j2: Tailwind CSS v4 entry point (src/index.css)
    - vite.config.ts.j2: Vite config with React, Tailwind and the `@` alias

Components:
    - theme-provider.tsx.j2: Dark mode context provider
    - mode-toggle.tsx.j2: Light/dark/system dropdown
    - App.tsx.j2: Starter app wiring the two together

Docs:
    - README.md.j2: Project readme with the favicon emoji

Template Context
----------------
All templates receive:

    config : ProjectConfig
        Full project configuration object

    emoji : str
        The emoji picked for this project

    reacthatch_version : str
        Version of reacthatch for attribution

    default_theme, storage_key, themes
        Dark mode settings shared by the component templates

See Also
--------
- generator.py: Module that renders these templates
"""

# Templates are loaded dynamically by Jinja2's PackageLoader.

#!/usr/bin/env python3
"""
Simple template engine for the console plugin script
Provides {{variable}} substitution over bundled template files
"""

import re
from pathlib import Path
from typing import Dict, Any, Optional

from ma3beatgrid.core.logger import log_info, log_error


TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateEngine:
    """Simple template engine with variable substitution"""

    def __init__(self, template_dir: Optional[str] = None):
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        self.template_cache: Dict[str, str] = {}

    def load_template(self, template_name: str) -> str:
        """Load template from file"""
        template_path = self.template_dir / template_name

        if not template_path.exists():
            raise FileNotFoundError(f"Template not found: {template_path}")

        # Cache templates; one export renders the same file for every conversion
        if template_name not in self.template_cache:
            try:
                with open(template_path, "r", encoding="utf-8") as f:
                    self.template_cache[template_name] = f.read()
                log_info(f"Loaded template: {template_name}", component="template")
            except Exception as e:
                log_error(
                    f"Error loading template {template_name}: {e}", component="template"
                )
                raise

        return self.template_cache[template_name]

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render template with context variables.

        Every ``{{name}}`` placeholder must be present in ``context``; a
        missing one raises KeyError instead of leaking into the plugin file.
        """
        template = self.load_template(template_name)

        def replace_var(match):
            var_name = match.group(1).strip()
            if var_name not in context:
                raise KeyError(f"Template {template_name} needs '{var_name}'")
            value = context[var_name]
            return "" if value is None else str(value)

        return re.sub(r"\{\{\s*([^}]+?)\s*\}\}", replace_var, template)

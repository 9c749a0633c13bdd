"""Filter configuration.

Defaults match the Quarto book setup: Julia input cells carry the ``julia``
or ``cell-code`` class, stderr output is tagged ``julia-stderr`` and ESC is
replaced upstream by a private two-character sentinel.

Environment overrides:
- ANSI2HTMLTEX_INCLUDE_STYLES: "0", "false" or "no" disables stylesheet injection
- ANSI2HTMLTEX_INPUT_CLASSES: comma separated classes marking input cells
"""

import os
from typing import Any, Optional

from pydantic import BaseModel

# Stands in for ESC (0x1b), which does not survive the notebook pipeline
ESC_SENTINEL = "\ua35f\u2983"


class FilterConfig(BaseModel):
    """Settings shared by the converter, the renderers and the pandoc filter."""

    sentinel: str = ESC_SENTINEL
    input_classes: list[str] = ["julia", "cell-code"]
    stderr_class: str = "julia-stderr"
    include_styles: bool = True

    # LaTeX environments, defined by the generated preamble
    shade_environment: str = "ShadedLight"
    plain_environment: str = "OutputCell"
    ansi_environment: str = "AnsiOutputCell"
    stderr_environment: str = "StderrOutputCell"


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "")


def load_config(
    environ: Optional[dict[str, str]] = None, **overrides: Any
) -> FilterConfig:
    """Build a FilterConfig from environment variables and explicit overrides.

    Overrides whose value is None are ignored, so CLI options that were not
    given fall back to the environment and then to the defaults.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    include_styles = env.get("ANSI2HTMLTEX_INCLUDE_STYLES")
    if include_styles is not None:
        values["include_styles"] = _env_flag(include_styles)

    input_classes = env.get("ANSI2HTMLTEX_INPUT_CLASSES")
    if input_classes:
        values["input_classes"] = [
            c.strip() for c in input_classes.split(",") if c.strip()
        ]

    values.update({k: v for k, v in overrides.items() if v is not None})
    return FilterConfig(**values)

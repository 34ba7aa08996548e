"""Formula rendering."""

from typing import Optional
import logging

from lxml import etree

from ..errors import ExamError, FormulaRenderError
from ..external.collaborators import FormulaRenderer
from ..schema import NS
from ..utils.xml import text_content

logger = logging.getLogger(__name__)


def render_formulas(
    root: etree._Element,
    renderer: Optional[FormulaRenderer],
    strict: bool = True,
) -> None:
    """
    Render every <e:formula> to SVG, stored in its svg attribute.

    Args:
        root: The <e:exam> element
        renderer: Formula renderer; without one formulas are left unrendered
        strict: Raise on render errors instead of skipping the formula

    Raises:
        ExamError: In strict mode, with the renderer's messages and the formula's line
    """
    formulas = root.xpath("//e:formula", namespaces=NS)
    if not formulas:
        return

    if renderer is None:
        logger.warning(f"No formula renderer configured, leaving {len(formulas)} formulas unrendered")
        return

    for formula in formulas:
        try:
            svg = renderer(text_content(formula), formula.get("mode"), strict)
        except FormulaRenderError as e:
            if strict:
                raise ExamError(", ".join(e.errors), formula.sourceline) from e
            logger.warning(f"Skipping formula on line {formula.sourceline}: {', '.join(e.errors)}")
            continue
        formula.set("svg", svg)

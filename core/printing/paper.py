"""
Paper formats understood by the renderers.

Names follow Playwright's ``page.pdf(format=...)``; sizes are portrait
width and height in CSS units.
"""

from typing import Optional, Union


PAPER_FORMATS = {
    'letter': ('8.5in', '11in'),
    'legal': ('8.5in', '14in'),
    'tabloid': ('11in', '17in'),
    'ledger': ('17in', '11in'),
    'a0': ('841mm', '1189mm'),
    'a1': ('594mm', '841mm'),
    'a2': ('420mm', '594mm'),
    'a3': ('297mm', '420mm'),
    'a4': ('210mm', '297mm'),
    'a5': ('148mm', '210mm'),
    'a6': ('105mm', '148mm'),
}


def _css_length(value: Optional[Union[str, int, float]]) -> Optional[str]:
    # Playwright treats bare numbers as pixels
    if isinstance(value, (int, float)):
        return f"{value}px"
    return value


def css_page_size(pdf_options: dict) -> str:
    """
    Translate PDF options into the value of a CSS ``@page { size: ... }`` rule.

    Explicit ``width`` and ``height`` win over ``format``, as they do in
    Playwright. ``landscape`` swaps the dimensions.

    Raises:
        ValueError: If the format is not a known paper format
    """
    width = _css_length(pdf_options.get('width'))
    height = _css_length(pdf_options.get('height'))

    if not (width and height):
        paper_format = str(pdf_options.get('format') or 'A4')
        try:
            width, height = PAPER_FORMATS[paper_format.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown paper format '{paper_format}', expected one of: "
                f"{', '.join(name.capitalize() for name in PAPER_FORMATS)}"
            )

    if pdf_options.get('landscape'):
        width, height = height, width
    return f"{width} {height}"

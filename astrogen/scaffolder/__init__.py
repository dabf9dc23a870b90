"""astrogen scaffolder -- renders Astro section and page skeletons.

Quick usage::

    from astrogen.scaffolder import SectionRenderer, SectionOptions

    renderer = SectionRenderer()
    markup = renderer.render("accordion", options=SectionOptions(open_first=False))
"""

from astrogen.scaffolder.pages import Breadcrumb, PageData, PageHead, PageRenderer
from astrogen.scaffolder.templates import SectionOptions, SectionRenderer

__all__ = [
    "Breadcrumb",
    "PageData",
    "PageHead",
    "PageRenderer",
    "SectionOptions",
    "SectionRenderer",
]

"""astrogen -- Astro section scaffolder with incremental project-file patching."""

__version__ = "0.1.0"

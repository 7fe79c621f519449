"""depwizard — pick npm packages from a curated catalog and wire them into package.json."""

__version__ = "0.1.0"

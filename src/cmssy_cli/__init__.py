"""cmssy-cli: author, validate, build, and package Cmssy blocks and templates."""

__version__ = "0.4.0"

"""Toolchain manager core: system descriptors, artifact selection and extraction,
link metadata and the auth manifest."""

__version__ = "1.0.0"
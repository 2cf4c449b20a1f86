"""Core building blocks for utilkit: utils, config, tables, exceptions."""

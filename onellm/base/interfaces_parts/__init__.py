"""Adapter contracts split into single-class modules; import via ``onellm.base.interfaces``."""

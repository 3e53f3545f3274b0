"""One-model-per-file response graph; import via ``onellm.base.response``."""

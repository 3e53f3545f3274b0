"""One-class-per-file request records; import via ``onellm.base.models``."""

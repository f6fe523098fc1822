"""archscan command-line interface."""

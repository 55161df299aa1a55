"""One module per page; each exposes render(cfg, use_mock)."""

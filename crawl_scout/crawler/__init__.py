"""crawl_scout.crawler: HTTP transport, response models and robots.txt policy."""

"""crawl_scout.parser: HTML parsing helpers shared by the detectors."""

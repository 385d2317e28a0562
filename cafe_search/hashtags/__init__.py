"""Short hashtag summaries for café records built from the keyword catalog."""

"""AAPC: a lossless, block-framed run-length byte codec with a round-trip harness."""

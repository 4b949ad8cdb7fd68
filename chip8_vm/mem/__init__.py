# Memory image

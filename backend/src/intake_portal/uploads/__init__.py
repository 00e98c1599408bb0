"""Upload proxy: one file in, one stored object out"""

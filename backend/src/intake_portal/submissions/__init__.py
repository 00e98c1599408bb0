"""Submission intake and review endpoints"""

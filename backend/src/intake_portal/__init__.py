"""Document Intake Portal backend"""

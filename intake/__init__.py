"""
submission-intake: name/email intake service writing JSONL and CSV logs.
"""

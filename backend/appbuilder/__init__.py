"""
Prompt-to-code relay backed by the Anthropic Messages API.
"""

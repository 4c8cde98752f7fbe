"""
GetCode: prompt-to-code generation with remote execution.
"""

"""
ScriptEngine Prompt Text
Static prompt blocks for principles, dimensions and the script writer.
"""

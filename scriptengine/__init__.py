"""
ScriptEngine
Planning, prompt assembly and quality validation for therapeutic hypnosis scripts.
"""

__version__ = "1.0.0"

"""
TermBuddy - AI-powered terminal command assistant

A CLI tool that turns natural-language requests into ready-to-run shell
commands for the current shell and operating system, using a hosted
(or local) language model.
"""
__version__ = "2.1.0"
__description__ = "AI-powered terminal command assistant"


__all__ = [
    "__version__",
    "__description__",
]

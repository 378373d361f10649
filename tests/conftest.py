import os
import platform

from hypothesis import settings


# byte level properties are cheap, run a few more of them by default
settings.register_profile(
    "id3edit", max_examples=settings.default.max_examples * 2)
settings.load_profile("id3edit")

if "CI" in os.environ:
    # CI can be slow, so be patient
    # Also we can run more tests there

    max_examples = settings.default.max_examples * 5
    if platform.python_implementation() == "PyPy":
        # PyPy is too slow
        max_examples = settings.default.max_examples

    settings.register_profile(
        "ci",
        deadline=None,
        max_examples=max_examples)
    settings.load_profile("ci")

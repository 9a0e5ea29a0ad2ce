"""Core building blocks: content stores, analysis, host bindings and factories."""

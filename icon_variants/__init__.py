"""
Icon Variants Package.

Generates size variants of selected square icons inside a design editor.
Each icon becomes a component set with one flattened, proportion-locked
component per requested size, laid out in a column next to the source.

Subpackages:
    scene: Node model, geometry, traversal and the host boundary
    variants: Sanitizer, eligibility, builder, assembler and layout
    configs: Configuration loading and validation
    utils: Logging and YAML helpers

Modules:
    generator: Run orchestration, cancellation and reporting
    messages: UI message models
    plugin: Entrypoint wiring a host to the generator
"""

__all__ = ["scene", "variants", "configs", "utils", "generator", "messages", "plugin"]

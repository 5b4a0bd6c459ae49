"""Ensure the public API surface is importable from the package root."""


def test_public_exports():
    """Test the public API is importable from the package root."""
    import concourse_resource

    required = [
        "Resource",
        "create_resource",
        "main",
        "InOutput",
        "OutOutput",
        "Empty",
        "KV",
        "BuildMetadata",
        "into_metadata_kv",
        "read_build_metadata",
        "StepError",
        "__version__",
    ]
    for name in required:
        assert hasattr(concourse_resource, name), f"Missing public export: {name}"


def test_internal_helpers_not_exported():
    """Test internal helpers stay out of the package exports."""
    import concourse_resource

    forbidden = ["step_from_invocation", "configure_logging", "run_step", "dump_compact_json"]
    for name in forbidden:
        assert not hasattr(concourse_resource, name), f"Internal {name} should not be exported"

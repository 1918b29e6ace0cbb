"""
reacthatch test suite
=====================

Test Modules
------------
- test_patcher.py: Tests for comment-tolerant tsconfig patching
- test_models.py: Tests for Pydantic configuration models
- test_generator.py: Tests for the scaffolding pipeline
- test_cli.py: Tests for the command-line interface
- test_runner.py: Tests for external command execution
- test_support.py: Tests for the clipboard, emoji picker and errors

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_patcher.py

    # Run specific test class
    pytest tests/test_patcher.py::TestIdempotence
"""

from properties.generators import (
    GeneratorConfig,
    GeneratorMode,
    SequenceGenerator,
    ShuffledSequenceGenerator,
    EdgeCaseGenerator,
    TestCaseGenerator,
    DiffTestCase,
    generate_test_cases
)


__all__ = [
    "GeneratorConfig",
    "GeneratorMode",
    "SequenceGenerator",
    "ShuffledSequenceGenerator",
    "EdgeCaseGenerator",
    "TestCaseGenerator",
    "DiffTestCase",
    "generate_test_cases"
]

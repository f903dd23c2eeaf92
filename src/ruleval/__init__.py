"""Ruleval — rule-string validation for records.

Rules are compact strings, one per field::

    from ruleval import validate

    result = validate(
        {"phone": "12345678900", "age": 24},
        {"phone": "required|string|size:11", "age": "integer|between:0,120"},
    )
    if not result:
        print(result.rejects)

Nested records take nested rule sets, and custom rules register on a
``Validator``::

    from ruleval import Validator

    validator = Validator()
    validator.add("older_than", lambda record, value, age: value > float(age))
    validator.set_config(resume_on_failed=True)
    validator.validate(person, {"age": "older_than:17", "address": {"zip": "digits:5"}})
"""

__version__ = "0.3.0"
__all__ = [
    "ConfigurationError",
    "File",
    "FileList",
    "Pattern",
    "Predicate",
    "Registry",
    "Reject",
    "RuleDefinitionError",
    "RuleDescriptor",
    "RulevalError",
    "Status",
    "UnknownRuleError",
    "UploadedFile",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "parse",
    "validate",
]

# name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "ruleval.errors",
    "File": "ruleval.files",
    "FileList": "ruleval.files",
    "Pattern": "ruleval.registry",
    "Predicate": "ruleval.registry",
    "Registry": "ruleval.registry",
    "Reject": "ruleval.result",
    "RuleDefinitionError": "ruleval.errors",
    "RuleDescriptor": "ruleval.parsing",
    "RulevalError": "ruleval.errors",
    "Status": "ruleval.result",
    "UnknownRuleError": "ruleval.errors",
    "UploadedFile": "ruleval.files",
    "ValidationResult": "ruleval.result",
    "Validator": "ruleval.engine",
    "ValidatorConfig": "ruleval.config",
    "parse": "ruleval.parsing",
    "validate": "ruleval.engine",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import ruleval`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)

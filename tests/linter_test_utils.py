from astroid import MANAGER  # type: ignore[import-untyped]
from astroid.builder import AstroidBuilder  # type: ignore[import-untyped]
from pylint.utils import ASTWalker


class MockLinter:
    """Just enough of PyLinter for a checker to be built and report."""

    def __init__(self) -> None:
        self.messages: list[tuple] = []

    def add_message(self, msg_id, line=None, node=None, args=None, *_args, **_kwargs):
        self.messages.append((msg_id, node, args))

    def is_message_enabled(self, *_args, **_kwargs) -> bool:
        return True

    def _register_options_provider(self, provider):
        pass


def run_checker(checker_cls, code, filename="test.py", **checker_kwargs) -> list:
    """Walk code with a checker; returns (msg_id, node, args) triples in report order."""
    linter = MockLinter()
    checker = checker_cls(linter, **checker_kwargs)
    tree = AstroidBuilder(MANAGER).string_build(code, modname="test_module", path=filename)
    walker = ASTWalker(linter)
    walker.add_checker(checker)
    walker.walk(tree)
    return linter.messages

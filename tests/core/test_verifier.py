# tests/core/test_verifier.py
"""
Testes do `Verifier` (dispatcher de regras sobre o motor de callbacks).

Os testes asseguram que:
- regras declaradas por decorator ou por `verify` executam em ordem
- `if_`/`unless` controlam quais regras disparam
- verifiers descendentes são delegados e suas mensagens concatenadas
- a verificação roda envolvida pelo grupo de callbacks `"verify"`,
  mesclado ao longo da hierarquia
"""

from verifly.core.verifier import Verifier, callback, rule


class RecordingVerifier(Verifier):
    def __init__(self, model):
        super().__init__(model)
        self.trace = []

    def message(self, text):
        return super().message(lambda: f"{type(self).__name__}: {text}")


class UserVerifier(RecordingVerifier):
    @rule()
    def name_present(self, context):
        if not self.model.get("name"):
            self.message("name missing")

    @rule(if_="is_strict")
    def email_present(self):
        if not self.model.get("email"):
            self.message("email missing")

    @rule(unless=lambda context: context.get("skip_age"))
    def age_positive(self, context):
        if self.model.get("age", 0) <= 0:
            self.message("age must be positive")

    def is_strict(self, context):
        return context.get("strict", False)

    @callback("before")
    def normalize(self):
        self.trace.append("normalize")
        self.model = {k: v for k, v in self.model.items() if v is not None}

    @callback("around", insert_before="normalize")
    def timing(self, proceed):
        self.trace.append("start")
        proceed()
        self.trace.append("stop")


class AdminVerifier(UserVerifier):
    @rule()
    def role_present(self, context):
        if not self.model.get("role"):
            self.message("role missing")

    @callback("after", requires="normalize")
    def audit(self):
        self.trace.append(f"audit:{len(self.messages)}")


UserVerifier.verify(AdminVerifier, if_=lambda context: context.get("admin"))


def test_rules_and_conditions():
    model = {"name": None, "age": 0}

    assert UserVerifier.call(model) == [
        "UserVerifier: name missing",
        "UserVerifier: age must be positive",
    ]
    assert UserVerifier.call(model, {"strict": True, "skip_age": True}) == [
        "UserVerifier: name missing",
        "UserVerifier: email missing",
    ]


def test_callbacks_wrap_rule_evaluation():
    verifier = UserVerifier({"name": "ann", "email": None, "age": 3})
    messages = verifier.run({"strict": True})

    assert verifier.trace == ["start", "normalize", "stop"]
    # `normalize` removeu a chave com None antes das regras
    assert messages == ["UserVerifier: email missing"]


def test_subclass_merges_parent_callbacks():
    assert UserVerifier.callback_group().names() == ["normalize", "timing"]
    assert AdminVerifier.callback_group().names() == ["normalize", "timing", "audit"]

    verifier = AdminVerifier({"name": "ann", "email": "a@b", "age": 1, "role": "ops"})
    assert verifier.run() == []
    assert verifier.trace == ["start", "normalize", "audit:0", "stop"]


def test_descendant_verifier_is_delegated():
    model = {"name": "ann", "age": -1}
    messages = UserVerifier.call(model, {"admin": True})
    assert messages == [
        "UserVerifier: age must be positive",
        "AdminVerifier: role missing",
    ]


def test_rules_are_not_inherited():
    assert len(AdminVerifier.rules()) == 1
    assert len(UserVerifier.rules()) == 4


def test_verify_accepts_callables_and_returns_rules():
    class Plain(Verifier):
        pass

    rules = Plain.verify(lambda verifier, context: verifier.message(lambda: context["note"]))
    assert len(rules) == 1
    assert Plain.call(object(), {"note": "hi"}) == ["hi"]
    assert Verifier.rules() == []


def test_messages_reset_between_runs():
    verifier = UserVerifier({"age": 1, "name": ""})
    assert len(verifier.run()) == 1
    assert len(verifier.run()) == 1


def test_descendant_runs_only_its_own_rules():
    """
    Verifica que delegar a um descendente não repete as regras do pai.

    Invariantes:
        - Um descendente sem regras próprias não produz mensagens
        - Cada mensagem do pai aparece exatamente uma vez
    """

    class Parent(RecordingVerifier):
        @rule()
        def always(self, context):
            self.message("always")

    class Child(Parent):
        pass

    Parent.verify(Child)

    assert Child.rules() == []
    assert Parent.call({}) == ["Parent: always"]


def test_base_callback_group_is_a_copy():
    group = Verifier.callback_group()
    group.add_callback("before", lambda verifier: None, "stray")

    assert Verifier.callback_group().names() == []
    assert UserVerifier.callback_group().names() == ["normalize", "timing"]

import pytest

from conftest import VALID_POD

from podwarden.core.models import Node, NodeKind
from podwarden.validator.validator import PodValidator


def test_valid_pod_has_no_errors(validate):
    assert validate(VALID_POD) == []


@pytest.mark.parametrize("text", ["", "- just\n- a list\n", "plain scalar\n"])
def test_non_mapping_root_is_terminal(messages, text):
    assert messages(text) == ["root must be a mapping"]


def test_missing_top_level_fields_reported_once_each(validate):
    """
    INDEPENDENCE TEST: each missing field yields exactly one error and
    the fields that are present are still validated.
    """
    errors = validate("apiVersion: v2\nkind: Pod\n")
    msgs = [e.message for e in errors]

    assert msgs == [
        "apiVersion has unsupported value 'v2'",
        "metadata is required",
        "spec is required",
    ]
    # A missing key has no source position
    assert errors[0].line == 1
    assert [e.line for e in errors[1:]] == [0, 0]
    assert errors[1].field == "metadata"


def test_unsupported_api_version_is_the_only_error(validate):
    errors = validate(VALID_POD.replace("apiVersion: v1", "apiVersion: v2"))
    assert len(errors) == 1
    assert errors[0].message == "apiVersion has unsupported value 'v2'"
    assert errors[0].line == 1


def test_kind_is_case_sensitive(messages):
    assert messages(VALID_POD.replace("kind: Pod", "kind: pod")) == ["kind has unsupported value 'pod'"]


def test_scalar_fields_reject_collections(messages):
    text = VALID_POD.replace("kind: Pod", "kind: [Pod]")
    assert messages(text) == ["kind must be string"]


def test_metadata_must_be_object(messages):
    text = VALID_POD.replace(
        "metadata:\n  name: web\n  namespace: prod\n  labels:\n    app: web\n",
        "metadata: web\n",
    )
    assert messages(text) == ["metadata must be object"]


def test_metadata_name_missing_vs_blank(validate):
    """
    The absent and blank cases produce deliberately different messages.
    """
    missing = validate(VALID_POD.replace("  name: web\n", ""))
    assert [(e.field, e.message) for e in missing] == [("metadata.name", "metadata.name is required")]

    blank = validate(VALID_POD.replace("  name: web\n", "  name: '   '\n"))
    assert [(e.field, e.message, e.line) for e in blank] == [("name", "name is required", 4)]


def test_metadata_name_must_be_string(messages):
    text = VALID_POD.replace("  name: web\n", "  name: {first: web}\n")
    assert messages(text) == ["metadata.name must be string"]


def test_namespace_must_be_string(messages):
    text = VALID_POD.replace("  namespace: prod\n", "  namespace: [prod]\n")
    assert messages(text) == ["metadata.namespace must be string"]


def test_labels_report_only_first_bad_value(validate):
    text = VALID_POD.replace(
        "  labels:\n    app: web\n",
        "  labels:\n    app: web\n    tier: [a]\n    team: {x: y}\n",
    )
    errors = validate(text)
    assert [e.message for e in errors] == ["metadata.labels has invalid format ''"]
    assert errors[0].line == 8


def test_labels_must_be_mapping(messages):
    text = VALID_POD.replace("  labels:\n    app: web\n", "  labels: app\n")
    assert messages(text) == ["metadata.labels must be object"]


def test_spec_requires_containers(messages):
    text = "apiVersion: v1\nkind: Pod\nmetadata:\n  name: web\nspec:\n  os: linux\n"
    assert messages(text) == ["spec.containers is required"]


def test_spec_must_be_object(messages):
    text = "apiVersion: v1\nkind: Pod\nmetadata:\n  name: web\nspec: []\n"
    assert messages(text) == ["spec must be object"]


@pytest.mark.parametrize("os_yaml", ["os: linux", "os: Windows", "os: LINUX", "os:\n    name: windows"])
def test_os_accepts_known_names_case_insensitively(validate, os_yaml):
    assert validate(VALID_POD.replace("os: linux", os_yaml)) == []


def test_os_echoes_original_case(messages):
    assert messages(VALID_POD.replace("os: linux", "os: MacOS")) == ["spec.os has unsupported value 'MacOS'"]


def test_os_mapping_rules(validate, messages):
    errors = validate(VALID_POD.replace("os: linux", "os:\n    name: Plan9"))
    assert [(e.field, e.message, e.line) for e in errors] == [
        ("spec.os.name", "spec.os has unsupported value 'Plan9'", 10)
    ]
    assert messages(VALID_POD.replace("os: linux", "os:\n    arch: amd64")) == ["spec.os.name is required"]
    assert messages(VALID_POD.replace("os: linux", "os:\n    name: [linux]")) == ["spec.os.name must be string"]


def test_os_sequence_is_rejected(messages):
    assert messages(VALID_POD.replace("os: linux", "os: [linux]")) == ["spec.os must be object"]


def test_os_is_optional(validate):
    assert validate(VALID_POD.replace("  os: linux\n", "")) == []


def test_unknown_top_level_fields_are_ignored(validate):
    assert validate(VALID_POD + "status:\n  phase: Running\n") == []


def test_validation_is_deterministic(validate):
    """
    ROUND-TRIP TEST: two runs over the same broken input agree exactly.
    """
    broken = VALID_POD.replace("apiVersion: v1", "apiVersion: v9").replace("cpu: 1", 'cpu: "1"')
    assert validate(broken) == validate(broken)


def test_validator_works_on_hand_built_trees():
    """The walker only depends on the Node model, not on the parser."""
    def scalar(value, line, tag="tag:yaml.org,2002:str"):
        return Node(NodeKind.SCALAR, line, value=value, tag=tag)

    root = Node(NodeKind.MAPPING, 1, pairs=(
        (scalar("apiVersion", 1), scalar("v1", 1)),
        (scalar("kind", 2), scalar("Pod", 2)),
    ))
    errors = PodValidator().validate(root)
    assert [e.message for e in errors] == ["metadata is required", "spec is required"]

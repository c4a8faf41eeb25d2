import pytest

from podwarden.parsing.loader import ManifestLoader
from podwarden.validator.validator import PodValidator

# A manifest that satisfies every rule
VALID_POD = """\
apiVersion: v1
kind: Pod
metadata:
  name: web
  namespace: prod
  labels:
    app: web
spec:
  os: linux
  containers:
  - name: web_server
    image: registry.bigbrother.io/web/server:1.0
    ports:
    - containerPort: 8080
      protocol: TCP
    readinessProbe:
      httpGet:
        path: /healthz
        port: 8080
    livenessProbe:
      httpGet:
        path: /livez
        port: 8080
    resources:
      requests:
        cpu: 1
        memory: 256Mi
      limits:
        cpu: 2
        memory: 1Gi
"""


def pod_with_container(container_yaml: str) -> str:
    """Wraps an indented container body into an otherwise valid Pod."""
    return (
        "apiVersion: v1\n"
        "kind: Pod\n"
        "metadata:\n"
        "  name: web\n"
        "spec:\n"
        "  containers:\n"
        + container_yaml
    )


@pytest.fixture
def validate():
    """Parses YAML text and returns the list of validation errors."""
    loader = ManifestLoader()
    validator = PodValidator()

    def _validate(text: str):
        return validator.validate(loader.load(text))

    return _validate


@pytest.fixture
def messages(validate):
    def _messages(text: str):
        return [e.message for e in validate(text)]

    return _messages

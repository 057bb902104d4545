import pytest

from prefroom.codegen import (
    ComponentDescriptor,
    EntityDescriptor,
    GeneratorConfig,
    KnownTypeResolver,
    MethodSignature,
    Parameter,
    TypeRef,
)


@pytest.fixture
def entities():
    return {
        "user": EntityDescriptor("User", "com.x"),
        "app": EntityDescriptor("App", "com.x"),
    }


@pytest.fixture
def sync_method():
    return MethodSignature("sync", parameters=(Parameter("r", TypeRef.of("com.x.Request")),))


@pytest.fixture
def manager(sync_method):
    return ComponentDescriptor("Manager", "com.x", ["user", "app"], [sync_method])


@pytest.fixture
def resolver():
    return KnownTypeResolver()


@pytest.fixture
def config():
    return GeneratorConfig()

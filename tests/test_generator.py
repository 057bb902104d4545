import pytest

from prefroom.codegen import (
    ComponentDescriptor,
    EntityDescriptor,
    EntityLookupError,
    GeneratorConfig,
    KnownTypeResolver,
    MethodSignature,
    NameCollisionError,
    Parameter,
    TypeRef,
    TypeResolutionError,
    ValidationError,
    generate_component,
)
from prefroom.codegen.core.generator import (
    entity_accessor_name,
    entity_field_name,
)
from prefroom.codegen.core.model import (
    LIST,
    STRING,
    Append,
    Assign,
    Call,
    ExpressionStatement,
    FieldRef,
    Literal,
    Modifier,
    Name,
    New,
    Raise,
    Return,
    ReturnIfSet,
)

PREFERENCE_ROOM = TypeRef.of("com.skydoves.preferenceroom.PreferenceRoom")
REQUEST = TypeRef.of("com.x.Request")


def _method(name, *param_types, returns="void"):
    params = tuple(
        Parameter(f"p{index}", TypeRef.of(type_name))
        for index, type_name in enumerate(param_types)
    )
    return MethodSignature(name, TypeRef.of(returns), params)


def _component(keys=("user", "app"), methods=()):
    return ComponentDescriptor("Manager", "com.x", keys, methods)


@pytest.fixture
def generated(manager, entities, resolver, config):
    return generate_component(manager, entities, resolver, config)


def test_class_is_named_after_component(generated):
    assert generated.name == "PreferenceComponent_Manager"
    assert generated.package_name == "com.x"
    assert generated.superinterface == TypeRef("com.x", "Manager")
    assert generated.modifiers == (Modifier.PUBLIC,)


def test_fields_follow_key_order(generated):
    assert generated.field_names() == ["instance", "instanceUser", "instanceApp"]
    assert generated.find_field("instance").type == TypeRef(
        "com.x", "PreferenceComponent_Manager"
    )
    assert generated.find_field("instanceUser").type == TypeRef(
        "com.x", "Preference_User"
    )
    assert generated.find_field("instanceApp").type == TypeRef("com.x", "Preference_App")
    for field in generated.fields:
        assert field.modifiers == (Modifier.PRIVATE, Modifier.STATIC)


def test_method_order(generated):
    assert generated.method_names() == [
        "init",
        "getInstance",
        "sync",
        "User",
        "App",
        "getEntityNameList",
    ]


def test_constructor_builds_entities_from_application_context(generated):
    constructor = generated.constructor
    assert constructor.is_constructor
    assert constructor.modifiers == (Modifier.PRIVATE,)
    assert [p.name for p in constructor.parameters] == ["context"]
    assert constructor.parameters[0].type == TypeRef.of("android.content.Context")
    assert constructor.parameters[0].annotations == (
        TypeRef.of("androidx.annotation.NonNull"),
    )

    app_context = Call(Name("context"), "getApplicationContext")
    assert constructor.statements == (
        Assign(
            FieldRef("instanceUser"),
            Call(TypeRef("com.x", "Preference_User"), "getInstance", (app_context,)),
        ),
        Assign(
            FieldRef("instanceApp"),
            Call(TypeRef("com.x", "Preference_App"), "getInstance", (app_context,)),
        ),
    )


def test_init_is_synchronized_and_returns_existing_instance(generated):
    init = generated.find_method("init")
    assert init.modifiers == (Modifier.PUBLIC, Modifier.STATIC, Modifier.SYNCHRONIZED)
    assert init.returns == generated.type_ref
    assert init.statements == (
        ReturnIfSet(FieldRef("instance")),
        Assign(FieldRef("instance"), New(generated.type_ref, (Name("context"),))),
        Return(FieldRef("instance")),
    )


def test_init_synchronization_can_be_disabled(manager, entities, resolver):
    config = GeneratorConfig(synchronized_init=False)
    init = generate_component(manager, entities, resolver, config).find_method("init")
    assert not init.is_synchronized


def test_get_instance_raises_when_uninitialized(generated):
    get_instance = generated.find_method("getInstance")
    assert get_instance.parameters == ()
    assert get_instance.is_static
    assert get_instance.statements == (
        ReturnIfSet(FieldRef("instance")),
        Raise("component is not initialized."),
    )


def test_injected_method_delegates_first_parameter(generated):
    sync = generated.find_method("sync")
    assert sync.overrides
    assert sync.returns.is_void
    assert [(p.name, p.type) for p in sync.parameters] == [("r", REQUEST)]
    assert sync.statements == (
        ExpressionStatement(Call(PREFERENCE_ROOM, "inject", (Name("r"),))),
    )


def test_injected_method_uses_only_first_parameter(entities, resolver):
    method = _method("bind", "com.x.Activity", "com.x.Bundle")
    class_spec = generate_component(_component(methods=[method]), entities, resolver)
    bind = class_spec.find_method("bind")
    assert len(bind.parameters) == 2
    assert bind.statements == (
        ExpressionStatement(Call(PREFERENCE_ROOM, "inject", (Name("p0"),))),
    )


def test_injector_type_is_configurable(manager, entities, resolver):
    config = GeneratorConfig(injector_type="com.example.Injector")
    sync = generate_component(manager, entities, resolver, config).find_method("sync")
    assert sync.statements[0].expression.target == TypeRef("com.example", "Injector")


def test_entity_accessors_return_fields(generated):
    user = generated.find_method("User")
    assert user.modifiers == (Modifier.PUBLIC,)
    assert user.returns == TypeRef("com.x", "Preference_User")
    assert user.statements == (Return(FieldRef("instanceUser")),)


def test_entity_name_list_preserves_keys(generated):
    name_list = generated.find_method("getEntityNameList")
    assert name_list.returns == LIST.parameterized(STRING)
    appended = [s.value for s in name_list.statements if isinstance(s, Append)]
    assert appended == [Literal("user"), Literal("app")]
    assert name_list.statements[-1] == Return(Name("EntityNameList"))


def test_accessor_and_field_names_derive_from_key():
    for key in ("user", "dark_mode", "appConfig"):
        assert entity_field_name(key) == "instance" + entity_accessor_name(key)
    assert entity_accessor_name("dark_mode") == "DarkMode"


def test_generation_is_deterministic(manager, entities, resolver, config):
    first = generate_component(manager, entities, resolver, config)
    second = generate_component(manager, entities, resolver, config)
    assert first == second


def test_header_comment_follows_add_comments(manager, entities, resolver):
    with_doc = generate_component(manager, entities, resolver, GeneratorConfig())
    without_doc = generate_component(
        manager, entities, resolver, GeneratorConfig(add_comments=False)
    )
    assert with_doc.doc == "Generated by prefroom. Do not edit."
    assert without_doc.doc is None


def test_component_without_keys_or_methods(entities, resolver):
    class_spec = generate_component(_component(keys=()), entities, resolver)
    assert class_spec.field_names() == ["instance"]
    assert class_spec.method_names() == ["init", "getInstance", "getEntityNameList"]
    assert class_spec.constructor.statements == ()


def test_overloads_with_different_parameter_types_are_allowed(entities, resolver):
    methods = [_method("sync", "com.x.Request"), _method("sync", "com.x.Other")]
    class_spec = generate_component(_component(methods=methods), entities, resolver)
    assert class_spec.method_names().count("sync") == 2


# Validation failures


def test_non_void_return_is_rejected(entities, resolver):
    method = _method("sync", "com.x.Request", returns="int")
    with pytest.raises(ValidationError) as excinfo:
        generate_component(_component(methods=[method]), entities, resolver)
    assert "'int'" in str(excinfo.value)
    assert "only return type can be void" in str(excinfo.value)


def test_zero_parameter_method_is_rejected(entities, resolver):
    with pytest.raises(ValidationError, match="no parameters"):
        generate_component(_component(methods=[_method("sync")]), entities, resolver)


def test_duplicate_keys_are_rejected(entities, resolver):
    with pytest.raises(ValidationError, match="Duplicate entity key 'user'"):
        generate_component(_component(keys=("user", "user")), entities, resolver)


def test_keys_colliding_after_camel_case_are_rejected(resolver):
    entities = {
        "user_id": EntityDescriptor("UserId", "com.x"),
        "userId": EntityDescriptor("UserIdentifier", "com.x"),
    }
    with pytest.raises(NameCollisionError, match="UserId"):
        generate_component(_component(keys=("user_id", "userId")), entities, resolver)


@pytest.mark.parametrize("key", ["1st", "--", "user$"])
def test_keys_without_valid_identifier_are_rejected(key, resolver):
    entities = {key: EntityDescriptor("Odd", "com.x")}
    with pytest.raises(ValidationError, match="valid identifier"):
        generate_component(_component(keys=(key,)), entities, resolver)


def test_accessor_colliding_with_declared_method_is_rejected(entities, resolver):
    method = _method("User", "com.x.Request")
    with pytest.raises(NameCollisionError, match="User"):
        generate_component(_component(methods=[method]), entities, resolver)


@pytest.mark.parametrize("name", ["init", "getInstance", "getEntityNameList"])
def test_declared_method_with_reserved_name_is_rejected(name, entities, resolver):
    method = _method(name, "com.x.Request")
    with pytest.raises(NameCollisionError, match=name):
        generate_component(_component(methods=[method]), entities, resolver)


def test_duplicate_signature_is_rejected(entities, resolver):
    methods = [_method("sync", "com.x.Request"), _method("sync", "com.x.Request")]
    with pytest.raises(NameCollisionError):
        generate_component(_component(methods=methods), entities, resolver)


def test_missing_entity_is_a_lookup_error(entities, resolver):
    with pytest.raises(EntityLookupError) as excinfo:
        generate_component(_component(keys=("user", "ghost")), entities, resolver)
    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.key == "ghost"
    assert excinfo.value.component_name == "Manager"


def test_unresolvable_context_type(manager, entities):
    with pytest.raises(TypeResolutionError, match="android.content.Context"):
        generate_component(manager, entities, KnownTypeResolver([]))


def test_validation_runs_before_type_resolution(entities):
    with pytest.raises(EntityLookupError):
        generate_component(
            _component(keys=("ghost",)), entities, KnownTypeResolver([])
        )


def test_descriptors_are_not_mutated(manager, entities, resolver):
    keys_before = manager.key_names
    entities_before = dict(entities)
    generate_component(manager, entities, resolver)
    assert manager.key_names == keys_before
    assert entities == entities_before


@pytest.mark.parametrize(
    "overrides",
    [
        {"injector_type": ""},
        {"injector_type": "com.x.Injector<"},
        {"nonnull_annotation": "androidx.annotation.NonNull..."},
    ],
)
def test_unparseable_config_types_are_validation_errors(
    manager, entities, resolver, overrides
):
    config = GeneratorConfig(**overrides)
    with pytest.raises(ValidationError, match="Invalid"):
        generate_component(manager, entities, resolver, config)


def test_empty_annotation_setting_means_no_annotation(manager, entities, resolver):
    config = GeneratorConfig(nonnull_annotation="")
    init = generate_component(manager, entities, resolver, config).find_method("init")
    assert init.parameters[0].annotations == ()


@pytest.mark.parametrize(
    "method_modifiers",
    [
        (Modifier.PUBLIC, Modifier.STATIC),
        (Modifier.PUBLIC, Modifier.SYNCHRONIZED),
        (Modifier.PRIVATE,),
        (),
    ],
)
def test_declared_methods_must_be_public_instance_methods(
    entities, resolver, method_modifiers
):
    method = MethodSignature(
        "sync", parameters=(Parameter("r", REQUEST),), modifiers=method_modifiers
    )
    with pytest.raises(ValidationError, match="must be public instance methods"):
        generate_component(_component(methods=[method]), entities, resolver)

"""
Component class generator.

Turns a component descriptor and its entity registry into the class tree of
a singleton facade: per-entity singletons built from a shared context, one
accessor per entity, injected overrides of the declared methods and the
ordered list of entity names.
"""

from typing import List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .descriptors import (
    ComponentDescriptor,
    EntityDescriptor,
    EntityRegistry,
    MethodSignature,
)
from .errors import EntityLookupError, NameCollisionError, ValidationError
from .model import (
    CONSTRUCTOR_NAME,
    LIST,
    STRING,
    Append,
    Assign,
    Call,
    ClassSpec,
    DeclareList,
    ExpressionStatement,
    FieldRef,
    FieldSpec,
    Literal,
    MethodSpec,
    Modifier,
    Name,
    New,
    ParameterSpec,
    Raise,
    Return,
    ReturnIfSet,
    TypeRef,
    modifiers,
)
from .naming import NameRegistry, is_identifier, to_upper_camel
from .resolver import TypeResolver

logger = get_logger(__name__)

CLASS_PREFIX = "PreferenceComponent_"
ENTITY_PREFIX = "Preference_"
FIELD_INSTANCE = "instance"
CONSTRUCTOR_CONTEXT = "context"
ENTITY_NAME_LIST = "EntityNameList"

INIT_METHOD = "init"
GET_INSTANCE_METHOD = "getInstance"
ENTITY_NAME_LIST_METHOD = "get" + ENTITY_NAME_LIST
ENTITY_FACTORY_METHOD = "getInstance"
APPLICATION_CONTEXT_METHOD = "getApplicationContext"
INJECT_METHOD = "inject"

UNINITIALIZED_MESSAGE = "component is not initialized."

RESERVED_METHOD_NAMES = (INIT_METHOD, GET_INSTANCE_METHOD, ENTITY_NAME_LIST_METHOD)


def component_class_name(component: ComponentDescriptor) -> str:
    """Name of the class generated for a component."""
    return CLASS_PREFIX + component.class_name


def entity_class_name(entity: EntityDescriptor) -> str:
    """Name of the generated wrapper class of an entity."""
    return ENTITY_PREFIX + entity.entity_name


def entity_class_type(entity: EntityDescriptor) -> TypeRef:
    return TypeRef(entity.package_name, entity_class_name(entity))


def entity_field_name(key: str) -> str:
    """Static field holding the entity singleton for a key."""
    return FIELD_INSTANCE + to_upper_camel(key)


def entity_accessor_name(key: str) -> str:
    """Public accessor returning the entity singleton for a key."""
    return to_upper_camel(key)


class ComponentGenerator:
    """Builds the class tree for one component."""

    def __init__(
        self,
        component: ComponentDescriptor,
        entities: EntityRegistry,
        type_resolver: TypeResolver,
        config: Optional[GeneratorConfig] = None,
    ):
        """
        Initialize generator.

        Args:
            component: Component to generate
            entities: Registry mapping entity keys to entity descriptors
            type_resolver: Resolves the platform context type
            config: Generator configuration
        """
        self.component = component
        self.entities = entities
        self.type_resolver = type_resolver
        self.config = config or GeneratorConfig()

    def generate(self) -> ClassSpec:
        """
        Generate the component class.

        Returns:
            Complete class tree

        Raises:
            ValidationError: If the component cannot be generated
            EntityLookupError: If a key has no registered entity
            TypeResolutionError: If the context type cannot be resolved
        """
        logger.debug("Generating component %s", self.component.class_name)

        # Validate everything before building any part of the tree
        self._validate()
        context_type = self.type_resolver.resolve(self.config.context_type)

        class_spec = ClassSpec(
            name=self.class_name,
            package_name=self.component.package_name,
            modifiers=modifiers(Modifier.PUBLIC),
            superinterface=self.component.interface_type,
            doc=self.config.header_comment if self.config.add_comments else None,
            fields=(self._instance_field(), *self._entity_fields()),
            constructor=self._constructor(context_type),
            methods=(
                self._init_method(context_type),
                self._get_instance_method(),
                *self._injected_methods(),
                *self._entity_accessors(),
                self._entity_name_list_method(),
            ),
        )

        logger.info(
            "Generated %s with %d entities and %d injected methods",
            class_spec.name,
            len(self.component.key_names),
            len(self.component.declared_methods),
        )
        return class_spec

    @property
    def class_name(self) -> str:
        return component_class_name(self.component)

    @property
    def class_type(self) -> TypeRef:
        return TypeRef(self.component.package_name, self.class_name)

    # Validation

    def _validate(self):
        """Check every precondition, failing on the first violation."""
        self._validate_keys()
        self._validate_entities()
        self._validate_derived_names()
        for method in self.component.declared_methods:
            self._validate_declared_method(method)
        self._validate_overloads()
        self._validate_config_types()

    def _validate_keys(self):
        seen = set()
        for key in self.component.key_names:
            if key in seen:
                raise ValidationError(
                    f"Duplicate entity key '{key}' in component "
                    f"'{self.component.class_name}'"
                )
            seen.add(key)

    def _validate_entities(self):
        for key in self.component.key_names:
            if key not in self.entities:
                logger.error(
                    "Unknown entity key '%s' in component %s",
                    key,
                    self.component.class_name,
                )
                raise EntityLookupError(key, self.component.class_name)

    def _validate_derived_names(self):
        """Every key must yield a unique identifier that no method shadows."""
        accessors = NameRegistry("method")
        for name in RESERVED_METHOD_NAMES:
            accessors.claim(name, "the generated singleton accessors")

        declared_names = {m.name for m in self.component.declared_methods}

        for key in self.component.key_names:
            accessor = entity_accessor_name(key)
            if not accessor or not is_identifier(accessor):
                raise ValidationError(
                    f"Entity key '{key}' does not produce a valid identifier "
                    f"(got '{accessor}')"
                )
            if accessor in declared_names:
                raise NameCollisionError(
                    f"Method name '{accessor}' derived from key '{key}' collides "
                    f"with a declared method of '{self.component.class_name}'"
                )
            accessors.claim(accessor, f"key '{key}'")

    def _validate_declared_method(self, method: MethodSignature):
        if tuple(method.modifiers) != (Modifier.PUBLIC,):
            declared = " ".join(m.value for m in method.modifiers) or "no modifiers"
            raise ValidationError(
                f"Method '{method.name}' is declared {declared}. "
                f"Injection methods must be public instance methods."
            )
        if not method.parameters:
            raise ValidationError(
                f"Method '{method.name}' declares no parameters. "
                f"At least one parameter is required as the injection target."
            )
        if not method.return_type.is_void:
            raise ValidationError(
                f"Returned '{method.return_type}'. only return type can be void."
            )

    def _validate_overloads(self):
        signatures = NameRegistry("signature")
        for method in self.component.declared_methods:
            name, parameter_types = method.signature
            if name in RESERVED_METHOD_NAMES:
                raise NameCollisionError(
                    f"Declared method '{name}' collides with a generated "
                    f"singleton accessor"
                )
            signatures.claim(
                f"{name}({', '.join(parameter_types)})", f"method '{method}'"
            )

    def _validate_config_types(self):
        """Configured type names must parse before they are placed in the tree."""
        for setting in ("injector_type", "nonnull_annotation"):
            value = getattr(self.config, setting)
            if setting == "nonnull_annotation" and not value:
                continue
            if not isinstance(value, str):
                raise ValidationError(f"Invalid {setting} {value!r}: not a type name")
            try:
                TypeRef.of(value)
            except ValueError as e:
                raise ValidationError(f"Invalid {setting} {value!r}: {e}") from e

    # Fields

    def _instance_field(self) -> FieldSpec:
        return FieldSpec(
            FIELD_INSTANCE, self.class_type, modifiers(Modifier.PRIVATE, Modifier.STATIC)
        )

    def _entity_fields(self) -> List[FieldSpec]:
        field_specs = []
        for key in self.component.key_names:
            field_specs.append(
                FieldSpec(
                    entity_field_name(key),
                    entity_class_type(self.entities[key]),
                    modifiers(Modifier.PRIVATE, Modifier.STATIC),
                )
            )
        return field_specs

    # Constructor and singleton accessors

    def _context_parameter(self, context_type: TypeRef) -> ParameterSpec:
        annotations = ()
        if self.config.nonnull_annotation:
            annotations = (TypeRef.of(self.config.nonnull_annotation),)
        return ParameterSpec(CONSTRUCTOR_CONTEXT, context_type, annotations)

    def _constructor(self, context_type: TypeRef) -> MethodSpec:
        statements = []
        for key in self.component.key_names:
            statements.append(
                Assign(
                    FieldRef(entity_field_name(key)),
                    Call(
                        entity_class_type(self.entities[key]),
                        ENTITY_FACTORY_METHOD,
                        (Call(Name(CONSTRUCTOR_CONTEXT), APPLICATION_CONTEXT_METHOD),),
                    ),
                )
            )

        return MethodSpec(
            CONSTRUCTOR_NAME,
            modifiers=modifiers(Modifier.PRIVATE),
            parameters=(self._context_parameter(context_type),),
            statements=tuple(statements),
        )

    def _init_method(self, context_type: TypeRef) -> MethodSpec:
        method_modifiers = [Modifier.PUBLIC, Modifier.STATIC]
        if self.config.synchronized_init:
            method_modifiers.append(Modifier.SYNCHRONIZED)

        return MethodSpec(
            INIT_METHOD,
            modifiers=modifiers(*method_modifiers),
            parameters=(self._context_parameter(context_type),),
            returns=self.class_type,
            statements=(
                ReturnIfSet(FieldRef(FIELD_INSTANCE)),
                Assign(
                    FieldRef(FIELD_INSTANCE),
                    New(self.class_type, (Name(CONSTRUCTOR_CONTEXT),)),
                ),
                Return(FieldRef(FIELD_INSTANCE)),
            ),
        )

    def _get_instance_method(self) -> MethodSpec:
        return MethodSpec(
            GET_INSTANCE_METHOD,
            modifiers=modifiers(Modifier.PUBLIC, Modifier.STATIC),
            returns=self.class_type,
            statements=(
                ReturnIfSet(FieldRef(FIELD_INSTANCE)),
                Raise(UNINITIALIZED_MESSAGE),
            ),
        )

    # Per-entity accessors

    def _entity_accessors(self) -> List[MethodSpec]:
        method_specs = []
        for key in self.component.key_names:
            method_specs.append(
                MethodSpec(
                    entity_accessor_name(key),
                    modifiers=modifiers(Modifier.PUBLIC),
                    returns=entity_class_type(self.entities[key]),
                    statements=(Return(FieldRef(entity_field_name(key))),),
                )
            )
        return method_specs

    # Injected overrides

    def _injected_methods(self) -> List[MethodSpec]:
        injector = TypeRef.of(self.config.injector_type)
        method_specs = []
        for method in self.component.declared_methods:
            inject_call = Call(
                injector, INJECT_METHOD, (Name(method.first_parameter.name),)
            )
            method_specs.append(
                MethodSpec(
                    method.name,
                    modifiers=modifiers(*method.modifiers),
                    parameters=tuple(
                        ParameterSpec(param.name, param.type)
                        for param in method.parameters
                    ),
                    returns=method.return_type,
                    statements=(ExpressionStatement(inject_call),),
                    overrides=True,
                )
            )
        return method_specs

    # Entity name list

    def _entity_name_list_method(self) -> MethodSpec:
        statements = [DeclareList(ENTITY_NAME_LIST, STRING)]
        for key in self.component.key_names:
            statements.append(Append(ENTITY_NAME_LIST, Literal(key)))
        statements.append(Return(Name(ENTITY_NAME_LIST)))

        return MethodSpec(
            ENTITY_NAME_LIST_METHOD,
            modifiers=modifiers(Modifier.PUBLIC),
            returns=LIST.parameterized(STRING),
            statements=tuple(statements),
        )


def generate_component(
    component: ComponentDescriptor,
    entities: EntityRegistry,
    type_resolver: TypeResolver,
    config: Optional[GeneratorConfig] = None,
) -> ClassSpec:
    """
    Generate the class tree for a component.

    Args:
        component: Component to generate
        entities: Registry mapping entity keys to entity descriptors
        type_resolver: Resolves the platform context type
        config: Generator configuration

    Returns:
        Complete class tree
    """
    return ComponentGenerator(component, entities, type_resolver, config).generate()

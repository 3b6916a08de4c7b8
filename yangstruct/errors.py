# Copyright 2021-2024 Nokia

from .exceptions import *

# identifiers and paths
yangstruct_err_can_have_one_colon = (InvalidPathError, "Identifier {value!r} can contain at most one ':'")
yangstruct_err_empty_path_tag = (InvalidPathError, "{field}: field did not specify a path")
yangstruct_err_invalid_path_tag = (InvalidPathError, "{field}: invalid path {path!r}")

# configuration
yangstruct_err_unknown_config_key = (ConfigError, "unknown configuration key {key!r} in {section}")
yangstruct_err_unknown_compress_behaviour = (ConfigError, "unknown compress behaviour {value!r}, expected one of {allowed}")
yangstruct_err_invalid_config_value = (ConfigError, "invalid value {value!r} for {key}, expected {expected}")

# schema processing
yangstruct_err_unknown_entry_kind = (ModelProcessingError, "unknown type of entry {kind} in find_mappable_entities for {path}")
yangstruct_err_cannot_find_module = (ModelProcessingError, "cannot find module for entry {path}, namespace {namespace!r}")
yangstruct_err_unresolved_type = (ModelProcessingError, "unresolved type {type} for {path}")
yangstruct_err_unimplemented_type = (ModelProcessingError, "unimplemented type: {kind}")
yangstruct_err_unimplemented_scalar_type = (ModelProcessingError, "unimplemented type in scalar generation: {kind}")
yangstruct_err_leafref_not_found = (ModelProcessingError, "schema tree cannot be resolved, leafref {path!r} at {context} does not point to a leaf")
yangstruct_err_leafref_loop = (ModelProcessingError, "leafref {path!r} at {context} resolves to itself")
yangstruct_err_leafref_without_tree = (ModelProcessingError, "cannot resolve leafref {path!r} at {context}, no schema tree was provided")
yangstruct_err_identity_no_base = (ModelProcessingError, "identityref at {path} does not have a base identity")
yangstruct_err_identity_multiple_bases = (ModelProcessingError, "identityref at {path} has multiple bases {bases}, which is not supported")
yangstruct_err_enum_without_context = (ModelProcessingError, "cannot map {what} without context entry")
yangstruct_err_enum_not_registered = (ModelProcessingError, "enumerated type at {path} was not registered, key {key!r}")
yangstruct_err_enum_bad_context = (ModelProcessingError, "enumerated leaf {path} does not have enough ancestors to be named")
yangstruct_err_union_member = (ModelProcessingError, "errors mapping element {path}: {errors}")
yangstruct_err_binary_key = (ModelProcessingError, "list {path} has binary key {field}, which cannot be used as a map key")
yangstruct_err_missing_key = (ModelProcessingError, "list {path} names key {field} which is not a child of the list")
yangstruct_err_invalid_proto_key = (ModelProcessingError, "list {path} included a key {field} that did not have a valid proto type: {type}")
yangstruct_err_proto_module_message = (ModelProcessingError, "YANG schema element {path} does not have a parent, protobuf messages are not generated for modules")
yangstruct_err_no_modules = (ModelProcessingError, "no modules were supplied for generation")
yangstruct_err_missing_directory = (ModelProcessingError, "field {field} of {path} refers to directory {target} which was not mapped")

# naming
yangstruct_err_overlapping_root = (NameCollisionError, "duplicate entry {name} at the root: {existing} and {new}")
yangstruct_err_fake_root_clash = (NameCollisionError, "fake root {name} clashes with existing entity at path {path}")

# runtime structs
yangstruct_err_nil_value = (CopyError, "got nil value")
yangstruct_err_deep_copy = (CopyError, "cannot DeepCopy struct: {reason}")
yangstruct_err_not_a_struct = (CopyError, "value {value!r} of type {type} is not a GoStruct")
yangstruct_err_invalid_interface = (CopyError, "invalid interface type received: {type}")
yangstruct_err_unsupported_field_value = (CopyError, "field {field} of {struct} has unsupported value of type {type}")
yangstruct_err_mismatched_types = (MergeError, "cannot merge structs that are not of matching types, {a} != {b}")
yangstruct_err_merge_ptr = (MergeError, "destination value was set, but was not equal to source value when merging ptr field, src: {src!r}, dst: {dst!r}")
yangstruct_err_merge_enum = (MergeError, "destination and source values were set when merging enum field, dst: {dst!r}, src: {src!r}")
yangstruct_err_merge_unique = (MergeError, "source and destination lists must be unique, got src: {src!r}, dst: {dst!r}")
yangstruct_err_merge_interface = (MergeError, "interface field was set in both src and dst and was not equal, src: {src!r}, dst: {dst!r}")
yangstruct_err_merge_map_key = (MergeError, "cannot merge map entries with key {key!r}: {reason}")
yangstruct_err_merge_shape = (MergeError, "invalid {side} field {field}, was not a {shape}: {type}")
yangstruct_err_slices_not_slices = (MergeError, "a and b must both be slices")
yangstruct_err_slices_type = (MergeError, "a and b do not contain the same type")
yangstruct_err_not_container = (YangStructError, "field {field} of {struct} is not a container")
yangstruct_err_unknown_field = (YangStructError, "{struct} does not have a field named {field}")
yangstruct_err_unknown_enum_type = (YangStructError, "cannot map enumerated value as type {type} was unknown")
yangstruct_err_out_of_range_enum = (YangStructError, "out-of-range {type} enum value: {value}")

# JSON
yangstruct_err_validation = (ValidationError, "validation err: {reason}")
yangstruct_err_internal_json = (JsonEncodeError, "ConstructInternalJSON error: {reason}")
yangstruct_err_ietf_json = (JsonEncodeError, "ConstructIETFJSON error: {reason}")
yangstruct_err_json_unsupported = (JsonEncodeError, "cannot encode value {value!r} of type {type}")
yangstruct_err_json_path_conflict = (JsonEncodeError, "path element {name} is both a leaf and a container")
yangstruct_err_merge_json_type = (MergeError, "cannot merge JSON values of different types at {key!r}: {a!r} and {b!r}")
yangstruct_err_merge_json_scalar = (MergeError, "unmergeable JSON values at {key!r}: {a!r} != {b!r}")
yangstruct_err_merge_json_input = (MergeError, "merge_json requires two JSON objects, got {a} and {b}")
yangstruct_err_duplicate_field = (ModelProcessingError, "{name} was a duplicate element in {path}")

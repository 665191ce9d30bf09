"""Grouping documented functions into namespaces."""

from autodoc.models import FunctionInfo, NamespaceInfo


def namespace_key(doc: FunctionInfo) -> str:
    """Namespace a record is grouped under; top-level functions form their own."""
    return doc.namespace or doc.short_name


def group_by_namespace(docs: list[FunctionInfo]) -> dict[str, list[FunctionInfo]]:
    """Group records by namespace key, keeping first-appearance order."""
    groups: dict[str, list[FunctionInfo]] = {}
    for doc in docs:
        groups.setdefault(namespace_key(doc), []).append(doc)
    return groups


def _member_order(doc: FunctionInfo) -> tuple[int, str]:
    # Static members first, then instance members, each alphabetically
    return (0 if doc.is_static else 1, doc.short_name)


def create_namespace_info(docs: dict[str, list[FunctionInfo]], namespace: str) -> NamespaceInfo:
    """Build the NamespaceInfo for one namespace.

    Args:
        docs: All records, grouped by namespace key
        namespace: Namespace to build

    Returns:
        NamespaceInfo whose all_members lists the constructor (if any), then
        static members, then instance members
    """
    constructor = next(
        (doc for group in docs.values() for doc in group if doc.name == namespace),
        None,
    )

    members = sorted(
        (doc for doc in docs.get(namespace, []) if doc.name != namespace),
        key=_member_order,
    )

    all_members = ([constructor] if constructor is not None else []) + members

    return NamespaceInfo(
        namespace=namespace,
        constructor=constructor,
        members=members,
        all_members=all_members,
        has_examples=any(m.has_examples for m in all_members),
        has_benchmarks=any(m.has_benchmarks for m in all_members),
    )

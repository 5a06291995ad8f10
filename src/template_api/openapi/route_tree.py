"""
Resource tree for API Gateway paths.

API Gateway models a path such as /data/{schemaId}/{itemId} as a chain of
nested resources. The tree creates each missing parent before its child and
memoizes every node by its full path, so endpoints sharing a prefix share the
intermediate resources.
"""

from typing import Dict, Iterator, List

from aws_cdk import aws_apigateway as apigw

from template_api.exceptions import InvalidPathError

ROOT_PATH = '/'


class RouteTree:
    """Map of path to API Gateway resource, seeded with the API root."""

    def __init__(self, root: apigw.IResource):
        self._nodes: Dict[str, apigw.IResource] = {ROOT_PATH: root}

    def ensure_resource(self, path: str) -> apigw.IResource:
        """
        Return the resource for path, creating it and any missing parents.

        Path segments are used verbatim; placeholders such as {itemId} are
        ordinary segment names here. Paths are case sensitive and trailing
        slashes are not normalized.

        Raises:
            InvalidPathError: path does not start with '/' or has no segment
        """
        node = self._nodes.get(path)
        if node is not None:
            return node

        if not path.startswith(ROOT_PATH):
            raise InvalidPathError(f'Unable to make route resource; path must start with "/": {path!r}')

        segments = [segment for segment in path.split('/') if segment]
        if not segments:
            raise InvalidPathError(f'Unable to make route resource; unexpectedly short path: {path!r}')

        leaf = segments.pop()
        branch = ROOT_PATH + '/'.join(segments)
        parent = self.ensure_resource(branch)

        node = parent.add_resource(leaf)
        self._nodes[path] = node
        return node

    @property
    def paths(self) -> List[str]:
        return list(self._nodes)

    def __getitem__(self, path: str) -> apigw.IResource:
        return self._nodes[path]

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

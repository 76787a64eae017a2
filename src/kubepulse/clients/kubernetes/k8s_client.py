# src/kubepulse/clients/kubernetes/k8s_client.py
"""Kubernetes client for table listings, access reviews and dynamic deletes."""

import time
from typing import Dict, Any, List, Optional
import yaml
import structlog
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException
from kubernetes.dynamic import DynamicClient

from kubepulse.core.base_client import BaseClient
from kubepulse.core.exceptions import ClientConnectionException
from kubepulse.core.utils import retry_with_backoff
from kubepulse.models.table_models import Table
from kubepulse.models.workload_models import DeleteOptions
from kubepulse.workloads.kinds import ResourceKind, is_all_namespaces, is_cluster_scoped

logger = structlog.get_logger(__name__)

TABLE_ACCEPT = "application/json;as=Table;v=v1;g=meta.k8s.io,application/json"


class KubernetesClient(BaseClient):
    """Async facade over the blocking kubernetes SDK.

    SDK calls run in worker threads; every call is bounded by
    ``call_timeout`` seconds.
    """

    def __init__(self,
                 config_dict: Dict[str, Any],
                 kubeconfig_path: Optional[str] = None,
                 context: Optional[str] = None,
                 kubeconfig_data: Optional[bytes] = None):
        super().__init__(config_dict, "Kubernetes")
        self.kubeconfig_path = kubeconfig_path
        self.context = context
        self.kubeconfig_data = kubeconfig_data

        self.api_client: Optional[client.ApiClient] = None
        self._dynamic_client: Optional[DynamicClient] = None

        self._get_table = retry_with_backoff(
            max_retries=self.retry_attempts, max_delay=self.call_timeout
        )(self._get_table_once)
        self._review_access = retry_with_backoff(
            max_retries=self.retry_attempts, max_delay=self.call_timeout
        )(self._review_access_once)

    async def connect(self) -> None:
        """Load kubeconfig and build the API client."""
        configuration = client.Configuration()
        try:
            if self.kubeconfig_data:
                kubeconfig_dict = yaml.safe_load(self.kubeconfig_data.decode('utf-8'))
                config.load_kube_config_from_dict(
                    kubeconfig_dict, context=self.context, client_configuration=configuration
                )
                self.logger.info("Loaded kubeconfig from provided data")
            elif self.kubeconfig_path:
                config.load_kube_config(
                    config_file=self.kubeconfig_path, context=self.context, client_configuration=configuration
                )
                self.logger.info("Loaded kubeconfig", path=self.kubeconfig_path)
            else:
                try:
                    config.load_kube_config(context=self.context, client_configuration=configuration)
                    self.logger.info("Loaded default kubeconfig")
                except ConfigException:
                    config.load_incluster_config(client_configuration=configuration)
                    self.logger.info("Loaded in-cluster config")
        except (ConfigException, OSError, yaml.YAMLError) as e:
            raise ClientConnectionException("Kubernetes", str(e))

        self.api_client = client.ApiClient(configuration)
        self._connected = True
        self.logger.info("Kubernetes client connected", host=configuration.host)

    async def disconnect(self) -> None:
        if self.api_client is not None:
            self.api_client.close()
        self.api_client = None
        self._dynamic_client = None
        self._connected = False
        self.logger.info("Kubernetes client disconnected")

    async def health_check(self) -> bool:
        """Check that the API server answers a version request."""
        if not self._connected:
            return False
        try:
            await self.run_blocking(client.VersionApi(self.api_client).get_code)
            return True
        except (client.ApiException, TimeoutError, OSError) as e:
            self.logger.warning("Kubernetes health check failed", error=str(e))
            return False

    def _require_connection(self) -> client.ApiClient:
        self.require_connected()
        if self.api_client is None:
            raise ClientConnectionException(self.name, "API client missing")
        return self.api_client

    # Table listing

    async def list_table(self, kind: ResourceKind, namespace: str) -> Optional[Any]:
        """List ``kind`` in ``namespace`` as a server-side table.

        Returns a ``Table`` when the server answered with one, otherwise the
        raw payload as received.
        """
        self._require_connection()
        data = await self.run_blocking(self._get_table, kind, namespace)

        if isinstance(data, dict) and data.get("kind") == "Table":
            return Table.model_validate(data)
        return data

    def _get_table_once(self, kind: ResourceKind, namespace: str) -> Any:
        return self.api_client.call_api(
            kind.api_path(namespace),
            "GET",
            query_params=[("includeObject", "Metadata")],
            header_params={"Accept": TABLE_ACCEPT},
            response_type="object",
            auth_settings=["BearerToken"],
            _return_http_data_only=True,
            _preload_content=True,
            _request_timeout=self.call_timeout,
        )

    # Access review

    async def can_i(self, namespace: str, kind: ResourceKind, name: str, verbs: List[str]) -> bool:
        """Whether the current identity may perform every verb on the resource."""
        self._require_connection()
        ns = None if is_cluster_scoped(namespace) or is_all_namespaces(namespace) else namespace
        for verb in verbs:
            allowed = await self.run_blocking(self._review_access, ns, kind, name, verb)
            if not allowed:
                self.logger.debug("Access denied", verb=verb, kind=str(kind), namespace=ns, name=name)
                return False
        return True

    def _review_access_once(self, namespace: Optional[str], kind: ResourceKind, name: str, verb: str) -> bool:
        attrs = client.V1ResourceAttributes(
            namespace=namespace,
            verb=verb,
            group=kind.group,
            version=kind.version,
            resource=kind.resource,
            name=name or None,
        )
        review = client.V1SelfSubjectAccessReview(
            spec=client.V1SelfSubjectAccessReviewSpec(resource_attributes=attrs)
        )
        resp = client.AuthorizationV1Api(self.api_client).create_self_subject_access_review(
            body=review, _request_timeout=self.call_timeout
        )
        status = getattr(resp, "status", None)
        return bool(getattr(status, "allowed", False))

    # Dynamic resources

    def dynamic(self, kind: ResourceKind) -> "DynamicResource":
        """Handle for cluster-scoped calls on ``kind``; use ``.namespace()`` to scope it."""
        self._require_connection()
        return DynamicResource(self, kind)

    def dynamic_client(self) -> DynamicClient:
        # DynamicClient runs API discovery on construction, so build it lazily.
        if self._dynamic_client is None:
            self._dynamic_client = DynamicClient(self._require_connection())
        return self._dynamic_client


class DynamicResource:
    """A kind bound to an optional namespace, supporting deletes."""

    def __init__(self, k8s_client: KubernetesClient, kind: ResourceKind, namespace: Optional[str] = None):
        self._client = k8s_client
        self.kind = kind
        self.namespace_name = namespace

    def namespace(self, namespace: str) -> "DynamicResource":
        return DynamicResource(self._client, self.kind, namespace)

    async def delete(self, name: str, options: DeleteOptions, deadline: Optional[float] = None) -> Any:
        """Delete ``name``; ``deadline`` is a ``time.monotonic()`` cut-off for sending the request."""
        return await self._client.run_blocking(self._delete, name, options, deadline)

    def _delete(self, name: str, options: DeleteOptions, deadline: Optional[float]) -> Any:
        resource = self._client.dynamic_client().resources.get(
            api_version=self.kind.api_version, kind=self.kind.kind_name
        )
        request_timeout = self._client.call_timeout
        if deadline is not None:
            request_timeout = deadline - time.monotonic()
            if request_timeout <= 0:
                logger.warning("Delete skipped, deadline passed during discovery",
                               kind=str(self.kind), name=name, namespace=self.namespace_name)
                raise TimeoutError(f"deadline passed before deleting {name}")
        return resource.delete(
            name=name,
            namespace=self.namespace_name,
            body=options.to_body(),
            _request_timeout=request_timeout,
        )

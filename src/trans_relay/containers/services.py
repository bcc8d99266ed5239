"""
应用服务容器：HTTP 策略、内容加载、供应商网关、状态回写与提交流水线。

`vendor_gateway` 需要一个由调用方管理生命周期的 httpx.AsyncClient，
通过 `container.services.orchestrator(gateway=...)` 或
`container.services.vendor_gateway(client=...)` 传入。
"""

from dependency_injector import containers, providers

from trans_relay.application import StatusReconciler, SubmissionOrchestrator
from trans_relay.config import TransRelayConfig
from trans_relay.infrastructure.content import ContentLoader
from trans_relay.infrastructure.http import ResilientHttpClient
from trans_relay.infrastructure.vendor import VendorGateway


class ServicesContainer(containers.DeclarativeContainer):
    config = providers.Dependency(instance_of=TransRelayConfig)
    uow_factory = providers.Dependency()

    http_policy = providers.Factory(
        ResilientHttpClient,
        policy=config.provided.retry_policy,
    )

    content_loader = providers.Factory(
        ContentLoader,
        content_dir=config.provided.docs_site.content_dir,
    )

    reconciler = providers.Factory(
        StatusReconciler,
        uow_factory=uow_factory,
    )

    vendor_gateway = providers.Factory(
        VendorGateway,
        vendor=config.provided.vendor,
        docs_site=config.provided.docs_site,
        http=http_policy,
        job_name_prefix=config.provided.job_name_prefix,
    )

    orchestrator = providers.Factory(
        SubmissionOrchestrator,
        uow_factory=uow_factory,
        loader=content_loader,
        gateway=vendor_gateway,
        reconciler=reconciler,
    )

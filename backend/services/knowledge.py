"""IDMC documentation lookup.

``KnowledgeSource`` is the seam where a real search or embedding index
plugs in. ``MockKnowledgeSource`` returns canned documentation keyed off
the topic of the query, and ``KnowledgeTool`` exposes any source to the
model as a callable tool.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from llm.tools import BaseTool, ToolDefinition
from services.types import KnowledgeResult

logger = logging.getLogger(__name__)

REFERENCE_LINKS: tuple[str, ...] = (
    "https://www.informatica.com/products/data-management-cloud.html",
    "https://docs.informatica.com/cloud-common-services/cloud-data-integration/current-version/getting-started/getting-started/informatica-intelligent-cloud-services--iics--overview.html",
)

PLATFORM_OVERVIEW = (
    "Informatica Data Management Cloud (IDMC) is a comprehensive, cloud-native, "
    "end-to-end data management platform. It offers various services including Data "
    "Integration, Data Quality, Master Data Management (MDM), Data Catalog, and Data "
    "Governance. IDMC is designed to help organizations manage, govern, and derive "
    "insights from their data across various cloud and on-premises environments. Key "
    "features include AI-powered automation (CLAIRE AI), metadata-driven data "
    "management, and a unified platform for all data initiatives. It supports "
    "multi-cloud and hybrid environments, ensuring flexibility and scalability for "
    "modern data ecosystems."
)

TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "data integration": (
        "integration",
        "etl",
        "elt",
        "replication",
        "connector",
        "mapping",
    ),
    "data governance": (
        "governance",
        "catalog",
        "cdgc",
        "lineage",
        "stewardship",
        "policy",
    ),
    "cloud data warehousing": (
        "warehouse",
        "snowflake",
        "redshift",
        "bigquery",
        "synapse",
    ),
}

TOPIC_SNIPPETS: dict[str, str] = {
    "data integration": (
        "IDMC offers robust data integration services, allowing users to connect to "
        "various data sources, transform data, and load it into target systems. Key "
        "features include cloud-native ETL, ELT, and replication capabilities, "
        "supporting both batch and real-time data movement. It also provides pre-built "
        "connectors for popular enterprise applications and databases."
    ),
    "data governance": (
        "IDMC's data governance capabilities are provided through modules like Cloud "
        "Data Governance and Catalog (CDGC). CDGC helps organizations discover, "
        "classify, and catalog their data assets across hybrid and multi-cloud "
        "environments. It enables data stewardship, lineage tracking, and policy "
        "enforcement to ensure data quality, compliance, and trustworthiness."
    ),
    "cloud data warehousing": (
        "IDMC supports integration with various cloud data warehouses like Snowflake, "
        "Amazon Redshift, Google BigQuery, and Azure Synapse Analytics. It optimizes "
        "data loading and transformation processes for these platforms, leveraging "
        "their native compute capabilities for high performance and scalability."
    ),
    "general": (
        "IDMC provides a unified platform for data integration, data governance, data "
        "quality, and master data management in the cloud, helping businesses unlock "
        "the value of their data assets with AI-powered capabilities and a "
        "microservices-based architecture."
    ),
}


class KnowledgeSource(ABC):
    """Abstract documentation lookup."""

    @abstractmethod
    async def lookup(self, query: str) -> KnowledgeResult:
        """Return documentation text and reference links for a query."""


class MockKnowledgeSource(KnowledgeSource):
    """Canned IDMC documentation. Always succeeds.

    Results depend only on the query's topic, so two queries on the same
    topic get the same documentation body and the same links.
    """

    @staticmethod
    def classify(query: str) -> str:
        """Map a query onto one of the canned documentation topics."""
        lowered = query.lower()
        for topic, keywords in TOPIC_KEYWORDS.items():
            if any(keyword in lowered for keyword in keywords):
                return topic
        return "general"

    async def lookup(self, query: str) -> KnowledgeResult:
        topic = self.classify(query)
        logger.info("Mock documentation lookup: topic=%s", topic)
        text = f"{PLATFORM_OVERVIEW}\n\nTopic: {topic}\n{TOPIC_SNIPPETS[topic]}"
        return KnowledgeResult(text=text, links=REFERENCE_LINKS)


class KnowledgeTool(BaseTool):
    """Exposes a knowledge source to the model as a tool."""

    def __init__(self, source: KnowledgeSource) -> None:
        self._source = source

    @property
    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name="retrieve_idmc_documentation",
            description=(
                "Retrieves relevant information from IDMC documentation and "
                "resources based on a query."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "The search query for IDMC documentation.",
                    }
                },
                "required": ["query"],
            },
        )

    async def execute(self, **params: Any) -> str:
        query = str(params.get("query", ""))
        result = await self._source.lookup(query)
        sources = "\n".join(f"- {link}" for link in result.links)
        return f'Documentation for "{query}":\n\n{result.text}\n\nSources:\n{sources}'

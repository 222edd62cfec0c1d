"""AI assistant for product notes, supplier emails and report summaries."""

import logging

from stockroom.schemas.dashboard import ReportStats
from stockroom.services.llm import LLMService
from stockroom.services.llm_prompts import (
    PRODUCT_DESCRIPTION_SYSTEM_PROMPT,
    REPORT_SUMMARY_SYSTEM_PROMPT,
    SUPPLIER_EMAIL_SYSTEM_PROMPT,
    get_product_description_prompt,
    get_report_summary_prompt,
    get_supplier_email_prompt,
)

logger = logging.getLogger(__name__)


class AssistantService:
    """Wraps the LLM with the inventory assistant prompts."""

    def __init__(self, llm_service: LLMService | None = None):
        self.llm_service = llm_service or LLMService()

    async def generate_product_description(self, name: str, category: str) -> str:
        """Short internal note on how a product is used."""
        return await self.llm_service.generate(
            prompt=get_product_description_prompt(name, category),
            system_prompt=PRODUCT_DESCRIPTION_SYSTEM_PROMPT,
            temperature=0.7,
            max_tokens=80,
        )

    async def generate_supplier_email(
        self,
        product_name: str,
        quantity: int,
        unit: str = "pcs",
        current_stock: int = 0,
        supplier_name: str | None = None,
    ) -> str:
        """Purchase order email with subject and body."""
        return await self.llm_service.generate(
            prompt=get_supplier_email_prompt(
                product_name, quantity, unit, current_stock, supplier_name
            ),
            system_prompt=SUPPLIER_EMAIL_SYSTEM_PROMPT,
            temperature=0.7,
            max_tokens=400,
        )

    async def summarize_report(self, stats: ReportStats) -> str:
        """Short analysis of inventory figures with recommendations."""
        logger.info(f"Summarizing report for {stats.total_products} products")
        return await self.llm_service.generate(
            prompt=get_report_summary_prompt(
                total_products=stats.total_products,
                total_stock=stats.total_stock,
                low_stock_count=stats.low_stock_count,
                out_of_stock_count=stats.out_of_stock_count,
                total_stock_value=stats.total_stock_value,
                top_categories=stats.top_categories,
            ),
            system_prompt=REPORT_SUMMARY_SYSTEM_PROMPT,
            temperature=0.7,
            max_tokens=300,
        )

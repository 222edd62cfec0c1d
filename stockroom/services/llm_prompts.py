"""LLM prompt templates for the inventory assistant."""

PRODUCT_DESCRIPTION_SYSTEM_PROMPT = """You are an internal inventory management assistant.
Write short internal notes for products. Do NOT write sales copy.
Write only 1-2 short sentences about where and how this item is used inside the company.
Avoid technical definitions; give practical usage information."""


def get_product_description_prompt(name: str, category: str) -> str:
    """Generate prompt for an internal product note."""
    return f"""Product: {name}
Category: {category}

Where might this item be used inside the company? Write it as a short footnote."""


SUPPLIER_EMAIL_SYSTEM_PROMPT = """You are a professional purchasing specialist writing order emails to suppliers.
Emails must be formal, clear and professional.
Write the subject line and the email body separately."""


def get_supplier_email_prompt(
    product_name: str,
    quantity: int,
    unit: str,
    current_stock: int,
    supplier_name: str | None,
) -> str:
    """Generate prompt for a purchase order email."""
    return f"""Write a purchase order email to the supplier for the following product:

Product: {product_name}
Order quantity: {quantity} {unit}
Current stock: {current_stock} {unit}
Supplier: {supplier_name or "Dear Sir or Madam"}

The email should be professional and clearly intended as an order."""


REPORT_SUMMARY_SYSTEM_PROMPT = """You are a stock management assistant.
Analyse the given inventory figures and write a short, focused summary.
Highlight the important points and make recommendations where appropriate."""


def get_report_summary_prompt(
    total_products: int,
    total_stock: int,
    low_stock_count: int,
    out_of_stock_count: int,
    total_stock_value: float,
    top_categories: list[str],
) -> str:
    """Generate prompt for an inventory report summary."""
    categories = ", ".join(top_categories) if top_categories else "none"
    return f"""Stock summary:
- Total products: {total_products}
- Total stock quantity: {total_stock} units
- Low stock warnings: {low_stock_count} products
- Out of stock: {out_of_stock_count} products
- Total stock value: ${total_stock_value:,.2f}
- Busiest categories: {categories}

Analyse these figures and give a short summary with recommendations."""

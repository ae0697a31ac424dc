"""Order confirmation template — sent when the owner confirms an order."""

from html import escape


class OrderConfirmationTemplate:
    notification_type = "order_confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total_amount = float(context.get("total_amount") or 0.0)
        delivery_address = context.get("delivery_address", "")
        status = context.get("status", "Confirmed")
        restaurant = context.get("restaurant_name")

        lines = [
            f"Your order #{order_id} has been confirmed.",
            "",
            "Order Details:",
            f"  Order ID: #{order_id}",
        ]
        if restaurant:
            lines.append(f"  Restaurant: {restaurant}")
        lines += [
            f"  Total Amount: ${total_amount:.2f}",
            f"  Delivery Address: {delivery_address}",
            f"  Status: {status}",
            "",
            "Thank you for choosing FoodCourt!",
        ]

        html_body = (
            "<h2>Your Order Has Been Confirmed</h2>"
            f"<p>Your order #{escape(str(order_id))} has been confirmed.</p>"
            "<ul>"
            f"<li>Order ID: #{escape(str(order_id))}</li>"
            f"<li>Total Amount: ${total_amount:.2f}</li>"
            f"<li>Delivery Address: {escape(delivery_address)}</li>"
            f"<li>Status: {escape(status)}</li>"
            "</ul>"
            "<p>Thank you for choosing FoodCourt!</p>"
        )

        return {
            "subject": "Order Confirmation",
            "body": "\n".join(lines),
            "html_body": html_body,
        }

"""Built-in Grafana documentation corpus and follow-up suggestions."""

from __future__ import annotations

from docchat.retrieval.models import Document

GRAFANA_DOCS: list[Document] = [
    Document(
        topic="Getting Started",
        content=(
            "Grafana is an open-source platform for monitoring and observability. "
            "To get started, download and install Grafana from the official website. "
            "The default port is 3000, and the default login is admin/admin."
        ),
        keywords=["install", "setup", "getting started", "download", "login"],
    ),
    Document(
        topic="Data Sources",
        content=(
            "Grafana supports multiple data sources including Prometheus, InfluxDB, MySQL, "
            "PostgreSQL, and Elasticsearch. To add a data source, go to Configuration > "
            "Data Sources > Add data source. Configure the connection details and test the "
            "connection before saving."
        ),
        keywords=[
            "data source",
            "prometheus",
            "influxdb",
            "mysql",
            "postgresql",
            "elasticsearch",
            "connection",
        ],
    ),
    Document(
        topic="Dashboards",
        content=(
            "Dashboards in Grafana are composed of panels that visualize your data. "
            "You can create a new dashboard from the + menu or import existing dashboards "
            "from grafana.com. Panels can display graphs, tables, stats, and more. "
            "Use variables to make dashboards dynamic."
        ),
        keywords=["dashboard", "panel", "visualization", "graph", "table", "import", "variable"],
    ),
    Document(
        topic="Alerts",
        content=(
            "Grafana alerting allows you to define alert rules based on your data. "
            "Create alert rules from any graph panel. Configure notification channels like "
            "email, Slack, or PagerDuty. Alert rules can have multiple conditions and thresholds."
        ),
        keywords=["alert", "notification", "slack", "email", "pagerduty", "threshold", "rule"],
    ),
    Document(
        topic="Queries",
        content=(
            "Each panel in Grafana has a query editor specific to its data source. "
            "For Prometheus, use PromQL. For SQL databases, write SQL queries. "
            "Use query transformations to modify data before visualization. "
            "The query editor supports autocomplete and syntax highlighting."
        ),
        keywords=["query", "promql", "sql", "transformation", "editor"],
    ),
    Document(
        topic="Plugins",
        content=(
            "Grafana has a rich ecosystem of plugins including data source plugins, panel "
            "plugins, and app plugins. Install plugins via the Grafana CLI or the UI. Popular "
            "plugins include the worldmap panel and the clock panel. You can also develop "
            "custom plugins using the Grafana SDK."
        ),
        keywords=["plugin", "extension", "custom", "worldmap", "sdk"],
    ),
    Document(
        topic="Authentication",
        content=(
            "Grafana supports multiple authentication methods including basic auth, OAuth, "
            "LDAP, and SAML. Configure authentication in the grafana.ini file or via "
            "environment variables. Set up organizations and teams to manage user access "
            "and permissions."
        ),
        keywords=["auth", "authentication", "oauth", "ldap", "saml", "login", "user", "permission"],
    ),
    Document(
        topic="API",
        content=(
            "Grafana provides a comprehensive HTTP API for automation. Use the API to create "
            "dashboards, data sources, users, and more programmatically. Authentication can be "
            "done via API keys or basic auth. API documentation is available at /docs/api on "
            "your Grafana instance."
        ),
        keywords=["api", "http", "automation", "rest", "endpoint", "key"],
    ),
]

GRAFANA_FOLLOW_UPS: dict[str, list[str]] = {
    "Getting Started": [
        "How do I change the default port?",
        "What are the system requirements?",
        "How do I upgrade Grafana?",
    ],
    "Data Sources": [
        "How do I configure Prometheus?",
        "Can I use multiple data sources?",
        "How do I troubleshoot connection issues?",
    ],
    "Dashboards": [
        "How do I share a dashboard?",
        "Can I export dashboards?",
        "How do I use dashboard variables?",
    ],
    "Alerts": [
        "How do I set up Slack notifications?",
        "Can I have multiple alert conditions?",
        "How do I silence alerts?",
    ],
    "Queries": [
        "What is PromQL?",
        "How do I join multiple queries?",
        "Can I use regular expressions in queries?",
    ],
    "Plugins": [
        "How do I install a plugin?",
        "Where can I find community plugins?",
        "How do I develop a custom plugin?",
    ],
    "Authentication": [
        "How do I set up OAuth?",
        "Can I use Active Directory?",
        "How do I manage user permissions?",
    ],
    "API": [
        "How do I create an API key?",
        "Can I automate dashboard creation?",
        "What are the API rate limits?",
    ],
}

DEFAULT_FOLLOW_UPS: list[str] = [
    "Tell me more about Grafana",
    "How do I get started?",
    "What are the main features?",
]

"""
Knowledge tools for the Fitness Genie MCP server.

Add websites and files to the session's knowledge base, search the
built-in research together with added sources, and report on what is
indexed.
"""

import logging

from fastmcp import Context

from fitness_genie.api.ingestion import DEFAULT_CATEGORY
from fitness_genie.client_factory import get_session, tool_errors
from fitness_genie.sdk.errors import IngestionError, ToolArgumentError

logger = logging.getLogger(__name__)

SEARCH_PROFILE_REQUIRED = (
    "❌ Please set up your profile first using the setup_user_profile tool "
    "for personalized knowledge search."
)

# Results taken from user-added sources per search
ADDED_SOURCE_RESULTS = 3

PREVIEW_CHARS = 100


def _preview(content: str) -> str:
    return f"{content[:PREVIEW_CHARS]}..."


def _knowledge_base_summary(stats: dict) -> list:
    return [
        "**📊 Updated Knowledge Base:**",
        f"- Total Documents: {stats['total_documents']}",
        f"- Categories: {', '.join(stats['categories'])}",
        f"- Sources: {len(stats['sources'])} unique sources",
    ]


def register_tools(app):
    """Register knowledge tools with the MCP app."""

    @app.tool()
    @tool_errors
    async def add_website_knowledge(
        url: str,
        ctx: Context,
        category: str = DEFAULT_CATEGORY,
        description: str = None,
    ) -> str:
        """
        Add a website to your coaching knowledge base.

        The page content becomes searchable and is included in coaching
        advice.

        Args:
            url: Website URL (http or https)
            category: Category for the content (default: fitness)
            description: What the website is about (optional)

        Returns:
            Confirmation with updated knowledge base stats
        """
        session = get_session(ctx)
        category = category or DEFAULT_CATEGORY
        try:
            chunks = session.ingestor.add_website(url, category)
        except IngestionError as e:
            logger.warning(f"Website ingestion failed for {url}: {e}")
            return "\n".join([
                "❌ **Failed to add website knowledge**",
                "",
                f"Error: {e}",
                "",
                "**Common Issues:**",
                "- Website might block automated access",
                "- URL might be incorrect",
                "- Content might not be text-based",
                "",
                "Try a different URL or check if the site is publicly accessible.",
            ])

        lines = [
            "🌐 **Website Knowledge Added Successfully!**",
            "",
            f"**Source:** {url}",
            f"**Category:** {category}",
            f"**Chunks Added:** {chunks} new document chunks",
        ]
        if description:
            lines.append(f"**Description:** {description}")
        lines.append("")
        lines += _knowledge_base_summary(session.dynamic_knowledge.stats())
        lines += [
            "",
            "This content is now searchable and will be included in coaching advice.",
        ]
        return "\n".join(lines)

    @app.tool()
    @tool_errors
    async def add_file_knowledge(
        file_path: str,
        ctx: Context,
        category: str = DEFAULT_CATEGORY,
        description: str = None,
    ) -> str:
        """
        Add a local text file to your coaching knowledge base.

        Args:
            file_path: Path to a text, markdown or HTML file
            category: Category for the content (default: fitness)
            description: What the file contains (optional)

        Returns:
            Confirmation with updated knowledge base stats
        """
        session = get_session(ctx)
        category = category or DEFAULT_CATEGORY
        try:
            chunks = session.ingestor.add_file(file_path, category)
        except IngestionError as e:
            logger.warning(f"File ingestion failed for {file_path}: {e}")
            return "\n".join([
                "❌ **Failed to add file knowledge**",
                "",
                f"Error: {e}",
                "",
                "**Troubleshooting:**",
                "- Check file path and permissions",
                "- Supported: TXT, MD, RST, HTML",
                "- File should contain substantial text content",
            ])

        lines = [
            "📄 **File Knowledge Added Successfully!**",
            "",
            f"**File:** {file_path}",
            f"**Category:** {category}",
            f"**Chunks Added:** {chunks} new document chunks",
        ]
        if description:
            lines.append(f"**Description:** {description}")
        lines.append("")
        lines += _knowledge_base_summary(session.dynamic_knowledge.stats())
        lines += ["", "Your file content is now part of the knowledge base."]
        return "\n".join(lines)

    @app.tool()
    @tool_errors
    async def search_knowledge(topic: str, ctx: Context, context: str = None) -> str:
        """
        Search the built-in research and your added sources.

        Built-in research is searched for the topic in the light of your
        goal; added websites and files are searched for the topic alone.

        Args:
            topic: What to search for (e.g. "protein timing")
            context: Extra context for the search (optional)

        Returns:
            Ranked passages from both knowledge bases
        """
        session = get_session(ctx)
        profile = session.profile
        if profile is None:
            return SEARCH_PROFILE_REQUIRED
        if not topic or not topic.strip():
            raise ToolArgumentError("topic is required")

        query = f"{topic} {context}" if context else topic
        static_results = session.static_knowledge.search(f"{query} for {profile.goal}")
        added_results = session.dynamic_knowledge.search(query, ADDED_SOURCE_RESULTS)
        stats = session.dynamic_knowledge.stats()

        lines = [f"🔍 **Knowledge Search: \"{topic}\"**", "", "**🧠 Built-in Research:**"]
        lines += [
            f"{i}. **{doc.category}** - {_preview(doc.content)}"
            for i, doc in enumerate(static_results, 1)
        ]
        lines += ["", "**📚 Your Added Sources:**"]
        if added_results:
            for i, doc in enumerate(added_results, 1):
                lines.append(f"{i}. **{doc.source}** ({doc.relevance_score * 100:.1f}% match)")
                lines.append(f"   {_preview(doc.content)}")
        else:
            lines.append("No knowledge sources added yet")
        lines += [
            "",
            "**📊 Search Stats:**",
            f"- Built-in results: {len(static_results)}",
            f"- Added-source results: {len(added_results)}",
            f"- Added documents: {stats['total_documents']}",
            f"- Added sources: {len(stats['sources'])}",
        ]
        return "\n".join(lines)

    @app.tool()
    @tool_errors
    async def get_rag_stats(ctx: Context) -> str:
        """
        Get statistics about the knowledge bases.

        Returns:
            Document counts, categories and sources for the built-in
            research and your added sources
        """
        session = get_session(ctx)
        built_in = session.static_knowledge.stats()
        added = session.dynamic_knowledge.stats()

        lines = [
            "🧠 **Knowledge Base Statistics**",
            "",
            "**📊 Built-in Research:**",
            f"- Documents: {built_in['total_documents']}",
            f"- Categories: {', '.join(built_in['categories'])}",
            f"- Embedding dimension: {built_in['embedding_dimension']}",
            "",
            "**📈 Added Sources:**",
            f"- Documents: {added['total_documents']}",
            f"- Unique sources: {len(added['sources'])}",
            f"- Categories: {', '.join(added['categories']) or 'None added yet'}",
            f"- Most recent: {added['most_recently_added']}",
            f"- Ingestion mode: {session.ingestor.mode}",
            "",
            "Use 'add_website_knowledge' or 'add_file_knowledge' to expand the knowledge base.",
        ]
        return "\n".join(lines)

    return app

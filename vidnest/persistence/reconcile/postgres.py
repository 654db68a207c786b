"""PostgreSQL implementation of the likes catalog."""

from sqlalchemy import delete, func, select, text, update
from sqlalchemy.ext.asyncio import AsyncEngine

from vidnest.persistence.errors import translate_storage_errors
from vidnest.persistence.reconcile.catalog import (
    DuplicateGroup,
    IndexDefinition,
    LikesCatalog,
)
from vidnest.persistence.tables import comments_table, likes_table

_INDEXES_SQL = text(
    """
    SELECT
        i.relname AS name,
        ix.indisunique AS is_unique,
        ix.indisvalid AS is_valid,
        pg_get_expr(ix.indpred, ix.indrelid) AS predicate,
        ARRAY(
            SELECT a.attname
            FROM unnest(ix.indkey) WITH ORDINALITY AS k(attnum, ord)
            JOIN pg_attribute a
              ON a.attrelid = ix.indrelid AND a.attnum = k.attnum
            ORDER BY k.ord
        ) AS columns
    FROM pg_index ix
    JOIN pg_class i ON i.oid = ix.indexrelid
    JOIN pg_class t ON t.oid = ix.indrelid
    JOIN pg_namespace n ON n.oid = t.relnamespace
    WHERE t.relname = :table
      AND n.nspname = current_schema()
      AND NOT ix.indisprimary
    ORDER BY i.relname
    """
)

_CHECK_SQL = text(
    """
    SELECT 1
    FROM pg_constraint c
    JOIN pg_class t ON t.oid = c.conrelid
    JOIN pg_namespace n ON n.oid = t.relnamespace
    WHERE t.relname = :table
      AND n.nspname = current_schema()
      AND c.contype = 'c'
      AND c.conname = :name
    """
)


def _target_count():
    return func.num_nonnulls(
        likes_table.c.video_id, likes_table.c.comment_id, likes_table.c.tweet_id
    )


class PostgresLikesCatalog(LikesCatalog):
    """Likes catalog backed by the Postgres system catalogs.

    Index DDL runs CONCURRENTLY on an autocommit connection so a live
    table keeps accepting writes; data repairs run in short transactions.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.table = likes_table.name

    def _quote(self, identifier: str) -> str:
        return self.engine.dialect.identifier_preparer.quote(identifier)

    async def _ddl(self, statement: str, operation: str) -> None:
        async with translate_storage_errors(operation, "index"):
            async with self.engine.connect() as conn:
                conn = await conn.execution_options(isolation_level="AUTOCOMMIT")
                await conn.execute(text(statement))

    async def list_indexes(self) -> list[IndexDefinition]:
        """List every non-primary index on the likes table."""
        async with translate_storage_errors("catalog.list_indexes", "index"):
            async with self.engine.connect() as conn:
                result = await conn.execute(_INDEXES_SQL, {"table": self.table})
                rows = [row._asdict() for row in result.fetchall()]

        return [
            IndexDefinition(
                name=row["name"],
                columns=tuple(row["columns"]),
                unique=row["is_unique"],
                predicate=row["predicate"],
                valid=row["is_valid"],
            )
            for row in rows
        ]

    async def drop_index(self, name: str) -> None:
        """Drop an index without blocking writes."""
        await self._ddl(
            f"DROP INDEX CONCURRENTLY IF EXISTS {self._quote(name)}",
            "catalog.drop_index",
        )

    async def create_index(self, index: IndexDefinition) -> None:
        """Build an index without blocking writes."""
        columns = ", ".join(self._quote(column) for column in index.columns)
        statement = (
            f"CREATE {'UNIQUE ' if index.unique else ''}INDEX CONCURRENTLY "
            f"IF NOT EXISTS {self._quote(index.name)} "
            f"ON {self._quote(self.table)} ({columns})"
        )
        if index.predicate:
            statement += f" WHERE {index.predicate}"
        await self._ddl(statement, "catalog.create_index")

    async def rename_index(self, name: str, new_name: str) -> None:
        """Rename an index in place."""
        await self._ddl(
            f"ALTER INDEX {self._quote(name)} RENAME TO {self._quote(new_name)}",
            "catalog.rename_index",
        )

    async def count_untargeted(self) -> int:
        """Count likes with no target column populated."""
        stmt = select(func.count()).select_from(likes_table).where(_target_count() == 0)
        return await self._scalar(stmt, "catalog.count_untargeted")

    async def delete_untargeted(self) -> int:
        """Delete likes with no target column populated."""
        stmt = delete(likes_table).where(_target_count() == 0)
        return await self._rowcount(stmt, "catalog.delete_untargeted")

    async def count_multi_targeted(self) -> int:
        """Count likes with more than one target column populated."""
        stmt = select(func.count()).select_from(likes_table).where(_target_count() > 1)
        return await self._scalar(stmt, "catalog.count_multi_targeted")

    async def find_duplicates(self, column: str) -> list[DuplicateGroup]:
        """Find (target, user) pairs liked more than once through a column."""
        target = likes_table.c[column]
        stmt = (
            select(target, likes_table.c.liked_by, func.count().label("copies"))
            .where(target.isnot(None))
            .group_by(target, likes_table.c.liked_by)
            .having(func.count() > 1)
        )
        async with translate_storage_errors("catalog.find_duplicates", "like"):
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                rows = result.fetchall()

        return [
            DuplicateGroup(
                column=column, target_id=row[0], liked_by=row[1], copies=row[2]
            )
            for row in rows
        ]

    async def delete_duplicates(self, column: str) -> int:
        """Delete duplicate likes, keeping the oldest of each group."""
        target = likes_table.c[column]
        ranked = (
            select(
                likes_table.c.id,
                func.row_number()
                .over(
                    partition_by=[target, likes_table.c.liked_by],
                    order_by=[likes_table.c.created_at, likes_table.c.id],
                )
                .label("position"),
            )
            .where(target.isnot(None))
            .subquery()
        )
        stmt = delete(likes_table).where(
            likes_table.c.id.in_(select(ranked.c.id).where(ranked.c.position > 1))
        )
        return await self._rowcount(stmt, "catalog.delete_duplicates")

    async def has_check_constraint(self, name: str) -> bool:
        """Whether the likes table carries the named CHECK constraint."""
        async with translate_storage_errors("catalog.has_check_constraint", "like"):
            async with self.engine.connect() as conn:
                result = await conn.execute(
                    _CHECK_SQL, {"table": self.table, "name": name}
                )
                return result.first() is not None

    async def add_check_constraint(self, name: str, expression: str) -> None:
        """Add a CHECK constraint to the likes table."""
        statement = (
            f"ALTER TABLE {self._quote(self.table)} "
            f"ADD CONSTRAINT {self._quote(name)} CHECK ({expression})"
        )
        async with translate_storage_errors("catalog.add_check_constraint", "like"):
            async with self.engine.begin() as conn:
                await conn.execute(text(statement))

    def _actual_like_count(self):
        return (
            select(func.count())
            .select_from(likes_table)
            .where(likes_table.c.comment_id == comments_table.c.id)
            .scalar_subquery()
        )

    async def count_like_count_drift(self) -> int:
        """Count comments whose like_count differs from their actual likes."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.like_count != self._actual_like_count())
        )
        return await self._scalar(stmt, "catalog.count_like_count_drift")

    async def resync_like_counts(self) -> int:
        """Recompute comments.like_count from the likes table."""
        actual = self._actual_like_count()
        stmt = (
            update(comments_table)
            .where(comments_table.c.like_count != actual)
            .values(like_count=actual)
        )
        return await self._rowcount(stmt, "catalog.resync_like_counts")

    async def _scalar(self, stmt, operation: str) -> int:
        async with translate_storage_errors(operation, "like"):
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                return result.scalar() or 0

    async def _rowcount(self, stmt, operation: str) -> int:
        async with translate_storage_errors(operation, "like"):
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                return result.rowcount

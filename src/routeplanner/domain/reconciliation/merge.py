"""Execute merges against repository ports.

Dependent rows are re-pointed or removed here explicitly; nothing relies on
store-level cascades.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from routeplanner.domain.errors import AliasNotFoundError, CompanyNotFoundError
from routeplanner.domain.model import AliasSource, CityCompany, CityCompanySource, CompanyAlias

from .contracts import MergeOutcome

if TYPE_CHECKING:
    from uuid import UUID

    from routeplanner.domain.ports import CatalogRepositories

log = logging.getLogger(__name__)


def merge_into(
    repositories: CatalogRepositories,
    source_id: UUID,
    target_id: UUID,
    *,
    provenance: str,
    link_source: CityCompanySource | None = None,
) -> MergeOutcome | None:
    """Fold company ``source_id`` into ``target_id``.

    Aliases move to the target tagged with ``provenance``. City links move with
    set semantics. The source row is deleted only when it owns no cargo rules;
    rules are never transferred, so a source with rules stays behind.

    Returns ``None`` when there is nothing to do (same id or unknown source).
    """

    if source_id == target_id:
        return None
    source = repositories.companies.get(source_id)
    if source is None:
        return None
    if repositories.companies.get(target_id) is None:
        raise CompanyNotFoundError(target_id)

    aliases = repositories.aliases.list_for_company(source_id)
    for alias in aliases:
        alias.repoint(target_id, source=provenance)

    moved = 0
    dropped = 0
    for link in repositories.city_companies.list_for_company(source_id):
        if repositories.city_companies.exists(city_id=link.city_id, company_id=target_id):
            dropped += 1
        else:
            repositories.city_companies.add(
                CityCompany(
                    city_id=link.city_id,
                    company_id=target_id,
                    source=link_source or link.source,
                )
            )
            moved += 1
        repositories.city_companies.remove(link)

    removed = False
    if repositories.cargo_rules.count_for_company(source_id) == 0:
        repositories.companies.remove(source)
        removed = True
    else:
        log.info("Keeping %s after merge: it still owns cargo rules", source.key)

    return MergeOutcome(
        source_id=source_id,
        target_id=target_id,
        aliases_repointed=len(aliases),
        links_moved=moved,
        links_dropped=dropped,
        source_removed=removed,
    )


def apply_mapping(
    repositories: CatalogRepositories,
    alias_key: str,
    target_company_id: UUID,
) -> MergeOutcome | None:
    """Manually map ``alias_key`` onto an existing company.

    The alias row is looked up first; failing that, a company whose key equals
    ``alias_key`` gets a fresh manual alias. The target always ends up mapped.
    """

    target = repositories.companies.get(target_company_id)
    if target is None:
        raise CompanyNotFoundError(target_company_id)

    alias = repositories.aliases.get_by_key(alias_key)
    if alias is None:
        company = repositories.companies.get_by_key(alias_key)
        if company is None:
            raise AliasNotFoundError(alias_key)
        source_id = company.id
        repositories.aliases.add(
            CompanyAlias(alias_key=alias_key, company_id=target.id, source=AliasSource.MANUAL)
        )
    else:
        source_id = alias.company_id
        alias.repoint(target.id, source=AliasSource.MANUAL)

    outcome = merge_into(
        repositories,
        source_id,
        target.id,
        provenance=AliasSource.MANUAL,
        link_source=CityCompanySource.MANUAL,
    )
    target.is_unmapped = False
    log.info("Mapped %s onto %s", alias_key, target.key)
    return outcome

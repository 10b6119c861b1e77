"""
Access Policy
Single decision table for who may do what on slots and visit requests.

Ownership, not role name alone, gates seller-level actions: a seller acting on
another seller's slot has exactly the relations a buyer would have.
"""

from enum import StrEnum
from typing import Mapping, Optional

from src.service.farm_visit.domain.enum.visit_action import VisitAction
from src.service.farm_visit.domain.farm_visit_errors import UnauthorizedError
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef


class Relation(StrEnum):
    ANYONE = 'anyone'  # guests included
    AUTHENTICATED = 'authenticated'
    REQUESTER = 'requester'
    SELLER_OWNER = 'seller_owner'
    ADMIN = 'admin'


# Relations that tie a caller to a specific visit request
REQUEST_RELATIONS = frozenset({Relation.REQUESTER, Relation.SELLER_OWNER, Relation.ADMIN})

_OWNER_OR_ADMIN = frozenset({Relation.SELLER_OWNER, Relation.ADMIN})

DEFAULT_DECISION_TABLE: Mapping[VisitAction, frozenset[Relation]] = {
    VisitAction.CREATE_SLOT: _OWNER_OR_ADMIN,
    VisitAction.UPDATE_SLOT: _OWNER_OR_ADMIN,
    VisitAction.DELETE_SLOT: _OWNER_OR_ADMIN,
    VisitAction.VIEW_UNPUBLISHED_SLOT: _OWNER_OR_ADMIN,
    VisitAction.SUBMIT_REQUEST: frozenset({Relation.ANYONE}),
    VisitAction.VIEW_SELLER_REQUESTS: _OWNER_OR_ADMIN,
    VisitAction.VIEW_OWN_REQUESTS: frozenset({Relation.REQUESTER, Relation.ADMIN}),
    VisitAction.VIEW_ALL_REQUESTS: frozenset({Relation.ADMIN}),
    VisitAction.APPROVE_REQUEST: _OWNER_OR_ADMIN,
    VisitAction.REJECT_REQUEST: _OWNER_OR_ADMIN,
    VisitAction.COMPLETE_REQUEST: _OWNER_OR_ADMIN,
    VisitAction.CANCEL_REQUEST: REQUEST_RELATIONS,
    VisitAction.OVERRIDE_REQUEST_STATUS: frozenset({Relation.ADMIN}),
}


class AccessPolicy:
    def __init__(
        self, *, decision_table: Optional[Mapping[VisitAction, frozenset[Relation]]] = None
    ) -> None:
        self._decision_table = decision_table or DEFAULT_DECISION_TABLE

    @staticmethod
    def relations_for(actor: Optional[Actor], resource: ResourceRef) -> frozenset[Relation]:
        relations = {Relation.ANYONE}
        if actor is None:
            return frozenset(relations)

        relations.add(Relation.AUTHENTICATED)
        if actor.is_admin:
            relations.add(Relation.ADMIN)
        if actor.is_seller and resource.seller_id is not None and resource.seller_id == actor.user_id:
            relations.add(Relation.SELLER_OWNER)
        if resource.requester_id is not None and resource.requester_id == actor.user_id:
            relations.add(Relation.REQUESTER)
        return frozenset(relations)

    def authorize(self, actor: Optional[Actor], action: VisitAction, resource: ResourceRef) -> bool:
        allowed = self._decision_table.get(action, frozenset())
        return bool(self.relations_for(actor, resource) & allowed)

    def enforce(self, actor: Optional[Actor], action: VisitAction, resource: ResourceRef) -> None:
        if not self.authorize(actor, action, resource):
            raise UnauthorizedError()

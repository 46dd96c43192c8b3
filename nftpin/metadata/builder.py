"""Token metadata records and the builder that produces them."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

TOKEN_NAME_PREFIX = "Autogas NFT #"
DESCRIPTION = (
    "This is an AutogasNft selling at 100$ purchase more than 100 "
    "and you'll be giving discount"
)
IPFS_SCHEME = "ipfs://"


@dataclass
class Attribute:
    """One trait entry in a token's ``attributes`` list."""
    trait_type: str
    value: Union[str, int, float]

    def to_dict(self) -> Dict[str, Any]:
        return {"trait_type": self.trait_type, "value": self.value}


@dataclass
class MetadataRecord:
    """Metadata document for a single token.

    Attributes:
        name: Display name, "Autogas NFT #<token id>"
        description: Collection description
        image: ipfs:// URI of the shared artwork
        properties: Fixed type/tier properties
        attributes: Ordered trait list
    """
    name: str
    description: str
    image: str
    properties: Dict[str, str] = field(default_factory=dict)
    attributes: List[Attribute] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return the record as a JSON-ready dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "properties": dict(self.properties),
            "attributes": [attribute.to_dict() for attribute in self.attributes],
        }

    def to_json(self) -> str:
        """Return the record as pretty-printed JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetadataRecord":
        """Create MetadataRecord from a parsed metadata document."""
        return cls(
            name=data["name"],
            description=data["description"],
            image=data["image"],
            properties=dict(data.get("properties", {})),
            attributes=[
                Attribute(item["trait_type"], item["value"])
                for item in data.get("attributes", [])
            ],
        )


def build_metadata(image_cid: str, token_id: int) -> MetadataRecord:
    """Build the metadata record for one token.

    Args:
        image_cid: CID of the uploaded artwork
        token_id: Token ordinal (1-based)

    Returns:
        MetadataRecord pointing at ``ipfs://<image_cid>``
    """
    return MetadataRecord(
        name=f"{TOKEN_NAME_PREFIX}{token_id}",
        description=DESCRIPTION,
        image=f"{IPFS_SCHEME}{image_cid}",
        properties={
            "type": "Autogas",
            "tier": "Standard",
        },
        attributes=[
            Attribute(trait_type="Category", value="Utility"),
        ],
    )

"""
Storage utility.

File I/O helpers for record snapshots and exported documents.
"""

import json
import os
import logging
from typing import Dict, List, Optional

from src.models.record import SignedRecord

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Reads record snapshots handed over by the query layer.
    
    Handles:
    - Listing records (data/listings.json)
    - Review records (data/reviews.json)
    - Payment receipts (data/receipts.json)
    
    Each file is a JSON array of records in wire format.
    """
    
    def __init__(self, data_root: str):
        """
        Initialize snapshot store.
        
        Args:
            data_root: Directory holding the snapshot files
        """
        self.data_root = data_root
        logger.info(f"Initialized SnapshotStore with data_root={data_root}")
    
    def load_records(self, filename: str) -> Optional[List[SignedRecord]]:
        """
        Load the records of one snapshot file.
        
        Args:
            filename: File name inside data_root
        
        Returns:
            List of records, or None if the file doesn't exist
        
        Raises:
            ValueError: If the file is not a JSON array
        """
        filepath = os.path.join(self.data_root, filename)
        
        if not os.path.exists(filepath):
            logger.warning(f"No snapshot found at {filepath}")
            return None
        
        try:
            with open(filepath, "r") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to load snapshot {filepath}: {e}")
            raise
        
        if not isinstance(raw, list):
            raise ValueError(f"Snapshot {filepath} must contain a JSON array")
        
        records = []
        for index, entry in enumerate(raw):
            if not isinstance(entry, dict):
                logger.warning(f"Skipping entry {index} in {filename}: not an object")
                continue
            try:
                records.append(SignedRecord.from_dict(entry))
            except ValueError as e:
                logger.warning(f"Skipping entry {index} in {filename}: {e}")
        
        logger.debug(f"Loaded {len(records)} records from {filepath}")
        return records
    
    def load_snapshot(
        self,
        listings_file: str,
        reviews_file: str,
        receipts_file: str
    ) -> Dict[str, List[SignedRecord]]:
        """
        Load all three collections; missing files count as empty.
        """
        return {
            "listings": self.load_records(listings_file) or [],
            "reviews": self.load_records(reviews_file) or [],
            "receipts": self.load_records(receipts_file) or []
        }
    
    def save_json(self, payload, filepath: str) -> None:
        """
        Write a JSON document, creating parent directories.
        """
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)
        
        try:
            with open(filepath, "w") as f:
                json.dump(payload, f, indent=2)
            logger.info(f"Saved {filepath}")
        except OSError as e:
            logger.error(f"Failed to save {filepath}: {e}")
            raise

# common/callbacks.py
from typing import Any, Dict, List, Optional

def make_logger():
    log = {
        "iter": [],               # iteration of each accepted move
        "length": [],             # tour length right after the move
        "tour": [],               # node order right after the move
        "extras": []              # {"k": 2|3, "delta": float}
    }
    def cb(iter_idx: int, length: float, nodes: List[Any], extras: Optional[Dict[str, Any]]=None):
        log["iter"].append(iter_idx)
        log["length"].append(float(length))
        log["tour"].append(nodes[:])
        log["extras"].append(extras or {})
    return log, cb

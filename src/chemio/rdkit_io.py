from __future__ import annotations

from typing import Dict, Tuple

from core.model import GraphSnapshot

try:
    from rdkit import Chem
    from rdkit.Chem.Draw import rdMolDraw2D
except Exception:  # pragma: no cover - optional dependency at runtime
    Chem = None
    rdMolDraw2D = None


def rdkit_available() -> bool:
    return Chem is not None and rdMolDraw2D is not None


def _require_rdkit():
    if not rdkit_available():
        raise RuntimeError("RDKit no disponible")


def _ensure_ring_info(mol) -> None:
    if hasattr(Chem, "FastFindRings"):
        Chem.FastFindRings(mol)
    else:
        Chem.GetSymmSSSR(mol)


def snapshot_to_rdkit_with_map(snapshot: GraphSnapshot):
    """Build an RDKit molecule; returns it with the atom id -> index map.

    Bonds with a missing endpoint are skipped, and the y axis is flipped
    because screen coordinates grow downwards.
    """
    _require_rdkit()
    rw = Chem.RWMol()
    id_map: Dict[str, int] = {}

    for atom in snapshot.atoms:
        id_map[atom.id] = rw.AddAtom(Chem.Atom(atom.element))

    for bond in snapshot.bonds:
        a1 = id_map.get(bond.source)
        a2 = id_map.get(bond.target)
        if a1 is None or a2 is None:
            continue
        if bond.order == 2:
            bond_type = Chem.BondType.DOUBLE
        elif bond.order == 3:
            bond_type = Chem.BondType.TRIPLE
        else:
            bond_type = Chem.BondType.SINGLE
        if rw.GetBondBetweenAtoms(a1, a2) is None:
            rw.AddBond(a1, a2, bond_type)

    mol = rw.GetMol()
    # Valencias fuera de lo habitual (p. ej., P pentavalente) no deben abortar
    # la exportación.
    mol.UpdatePropertyCache(strict=False)
    _ensure_ring_info(mol)
    conf = Chem.Conformer(mol.GetNumAtoms())
    for atom in snapshot.atoms:
        conf.SetAtomPosition(id_map[atom.id], (atom.x, -atom.y, 0.0))
    mol.AddConformer(conf, assignId=True)
    return mol, id_map


def snapshot_to_rdkit(snapshot: GraphSnapshot):
    mol, _ = snapshot_to_rdkit_with_map(snapshot)
    return mol


def snapshot_to_canonical_smiles(snapshot: GraphSnapshot) -> str:
    mol = snapshot_to_rdkit(snapshot)
    return Chem.MolToSmiles(mol, canonical=True)


def snapshot_to_molfile(snapshot: GraphSnapshot) -> str:
    mol = snapshot_to_rdkit(snapshot)
    return Chem.MolToMolBlock(mol)


def snapshot_to_svg(snapshot: GraphSnapshot, size: Tuple[int, int] = (300, 200)) -> str:
    mol = snapshot_to_rdkit(snapshot)
    drawer = rdMolDraw2D.MolDraw2DSVG(size[0], size[1])
    rdMolDraw2D.PrepareAndDrawMolecule(drawer, mol)
    drawer.FinishDrawing()
    return drawer.GetDrawingText()

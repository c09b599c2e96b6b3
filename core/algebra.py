# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Table-driven geometric product of the Euclidean 4D algebra Cl(4,0).

Blades are indexed by bitmask (bit 0 = x, bit 1 = y, bit 2 = z, bit 3 = w),
so the full algebra has 16 coefficients. The closed-form rotor products in
:mod:`core.rotor` only cover the grades a rotation needs; this kernel covers
all of them and serves as the reference those formulas must agree with.
"""

import torch

from core.multivector import Multivector

# Bitmask of each component of the fixed-layout types
VECTOR_BLADES = (0b0001, 0b0010, 0b0100, 0b1000)
BIVECTOR_BLADES = (0b0011, 0b0101, 0b1001, 0b0110, 0b1010, 0b1100)
ROTOR_BLADES = (0b0000, *BIVECTOR_BLADES, 0b1111)
TRIVECTOR_BLADES = (0b0111, 0b1011, 0b1101, 0b1110)


class EuclideanAlgebra4:
    """Cayley-table kernel for Cl(4,0).

    Attributes:
        n (int): Number of basis vectors (4).
        dim (int): Number of basis blades (16).
        dtype (torch.dtype): Coefficient dtype.
    """
    _CACHED_TABLES = {}

    def __init__(self, dtype=torch.float64):
        self.n = 4
        self.dim = 2 ** self.n
        self.dtype = dtype

        if dtype not in EuclideanAlgebra4._CACHED_TABLES:
            EuclideanAlgebra4._CACHED_TABLES[dtype] = self._generate_cayley_table()

        (
            self.cayley_indices,
            self.cayley_signs,
            self.gp_signs,
            self.grade_masks,
            self.rev_signs,
        ) = EuclideanAlgebra4._CACHED_TABLES[dtype]

    def _generate_cayley_table(self):
        """Precompute the Cayley table, grade masks, and reversion signs."""
        indices = torch.arange(self.dim)

        # Result index = A XOR B
        cayley_indices = indices.unsqueeze(0) ^ indices.unsqueeze(1)
        cayley_signs = self._compute_signs(indices)

        # gp_signs[i, k] is the sign of e_i * e_(i ^ k)
        gp_signs = torch.gather(cayley_signs, 1, cayley_indices)

        grade_masks = []
        for k in range(self.n + 1):
            grade_masks.append(torch.tensor(
                [bin(i).count('1') == k for i in range(self.dim)], dtype=torch.bool,
            ))

        # Blade of grade k reverses with sign (-1)^(k(k-1)/2)
        rev_signs = torch.tensor(
            [(-1) ** (k * (k - 1) // 2) for k in (bin(i).count('1') for i in range(self.dim))],
            dtype=self.dtype,
        )

        return cayley_indices, cayley_signs, gp_signs, grade_masks, rev_signs

    def _compute_signs(self, indices: torch.Tensor) -> torch.Tensor:
        """Sign matrix from commutation parity. Every basis vector squares to +1."""
        A = indices.unsqueeze(1)
        B = indices.unsqueeze(0)

        # Count the swaps needed to bring e_A e_B into canonical order:
        # pairs (a in A, b in B) with a > b
        swap_counts = torch.zeros((self.dim, self.dim), dtype=torch.long)
        for i in range(self.n):
            a_i = (A >> i) & 1
            b_lower = B & ((1 << i) - 1)

            b_lower_cnt = torch.zeros_like(B)
            temp_b = b_lower
            for _ in range(self.n):
                b_lower_cnt += temp_b & 1
                temp_b = temp_b >> 1

            swap_counts += a_i * b_lower_cnt

        return ((-1) ** swap_counts).to(dtype=self.dtype)

    def geometric_product(self, A: torch.Tensor, B: torch.Tensor) -> torch.Tensor:
        """Computes the geometric product of ``[..., 16]`` coefficient tensors."""
        from core.validation import check_multivector
        check_multivector(A, self, "geometric_product(A)")
        check_multivector(B, self, "geometric_product(B)")

        # result[..., k] = sum_i A[..., i] * B[..., i ^ k] * signs[i, k]
        B_gathered = B[..., self.cayley_indices]
        return (A.unsqueeze(-1) * B_gathered * self.gp_signs).sum(dim=-2)

    def grade_projection(self, mv: torch.Tensor, grade: int) -> torch.Tensor:
        result = torch.zeros_like(mv)
        mask = self.grade_masks[grade]
        result[..., mask] = mv[..., mask]
        return result

    def reverse(self, mv: torch.Tensor) -> torch.Tensor:
        return mv * self.rev_signs

    def embed(self, components, blades) -> torch.Tensor:
        """Scatters fixed-layout ``components`` into a full 16-blade multivector."""
        mv = torch.zeros(self.dim, dtype=self.dtype)
        for value, blade in zip(components, blades):
            mv[blade] = value
        return mv

    def extract(self, mv: torch.Tensor, blades) -> list:
        """Gathers the coefficients of ``blades`` from a full multivector."""
        return [mv[blade].item() for blade in blades]

    def embed_vector(self, vector: Multivector) -> torch.Tensor:
        return self.embed(vector, VECTOR_BLADES)

    def embed_rotor(self, rotor: Multivector) -> torch.Tensor:
        return self.embed(rotor, ROTOR_BLADES)

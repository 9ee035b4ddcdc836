"""Coq proof script asserting the join of every pair of structures."""

from __future__ import annotations

from typing import Iterable, Sequence

from hierdiag.analysis.joins import Join

_HEADER = """\
(** Generated by hierdiag *)
From mathcomp Require Import {libs}.

(* `check_join t1 t2 tjoin` assert that the join of `t1` and `t2` is `tjoin`. *)
Tactic Notation "check_join"
       open_constr(t1) open_constr(t2) open_constr(tjoin) :=
  let rec fillargs t :=
    lazymatch type of t with
      | forall _, _ => let t' := open_constr:(t _) in fillargs t'
      | _ => t
    end
  in
  let t1 := fillargs t1 in
  let t2 := fillargs t2 in
  let tjoin := fillargs tjoin in
  let T1 := open_constr:(_ : t1) in
  let T2 := open_constr:(_ : t2) in
  match tt with
    | _ => unify ((fun x : t1 => x : Type) T1) ((fun x : t2 => x : Type) T2)
    | _ => fail "There is no join of" t1 "and" t2 "but is expected to be" tjoin
  end;
  let Tjoin :=
    lazymatch T1 with
      _ (_ ?Tjoin) => Tjoin | _ ?Tjoin => Tjoin | ?Tjoin => Tjoin
    end
  in
  match tt with
    | _ => is_evar Tjoin
    | _ =>
      let Tjoin := eval simpl in (Tjoin : Type) in
      fail "The join of" t1 "and" t2 "is a concrete type" Tjoin
           "but is expected to be" tjoin
  end;
  let tjoin' := type of Tjoin in
  lazymatch tjoin' with
    | tjoin => idtac
    | _ => fail "The join of" t1 "and" t2 "is" tjoin'
                "but is expected to be" tjoin
  end.

Goal False.
"""

_FOOTER = "Abort.\n"


def check_join_directive(join: Join) -> str:
    return f"check_join {join.left}.type {join.right}.type {join.join}.type."


def render_verifier(joins: Iterable[Join], *, libs: Sequence[str]) -> str:
    lines = [_HEADER.format(libs=" ".join(libs))]
    lines.extend(check_join_directive(join) + "\n" for join in joins)
    lines.append(_FOOTER)
    return "".join(lines)

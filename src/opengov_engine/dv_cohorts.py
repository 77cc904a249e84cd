"""
Decentralized voices cohorts

Static registry of the delegation rounds run on Polkadot and Kusama, with the
delegates (DAOs) and guardians of each round.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .cohorts import select_cohort
from .models import Cohort, CohortDelegate
from .types import CohortStatus, DelegateRole

logger = logging.getLogger(__name__)

# Tracks the decentralized voices delegations cover, by track name
DV_TRACKS = (
    "treasurer",
    "small_tipper",
    "big_tipper",
    "small_spender",
    "medium_spender",
    "big_spender",
    "wish_for_change",
)

# The first round did not delegate on the treasurer and wish-for-change tracks
_FIRST_ROUND_TRACKS = tuple(t for t in DV_TRACKS if t not in ("treasurer", "wish_for_change"))

_PERMANENCE_DAO = "Permanence DAO"
_LUCKY_FRIDAY_LABS = "Lucky Friday Labs"


def _dao(address: str, name: str) -> CohortDelegate:
    return CohortDelegate(address=address, name=name, role=DelegateRole.DAO)


def _guardian(address: str, name: str) -> CohortDelegate:
    return CohortDelegate(address=address, name=name, role=DelegateRole.GUARDIAN)


def _cohort(
    index: int,
    network: str,
    status: CohortStatus,
    start: Tuple[str, int],
    end: Tuple[Optional[str], Optional[int]],
    tracks: Sequence[str],
    delegates: Sequence[CohortDelegate]
) -> Cohort:
    return Cohort(
        index=index,
        network=network,
        status=status,
        start_time=start[0],
        start_block=start[1],
        end_time=end[0],
        end_block=end[1],
        tracks=list(tracks),
        delegates=list(delegates),
    )


_KUSAMA_COHORTS = (
    _cohort(
        1, "kusama", CohortStatus.CLOSED,
        start=("2024-02-26T18:11:12Z", 22045831),
        end=("2024-06-10T16:57:42Z", 23551323),
        tracks=_FIRST_ROUND_TRACKS,
        delegates=(
            _dao("GqC37KSFFeGAoL7YxSeP1YDwr85WJvLmDDQiSaprTDAm8Jj", "Alex PromoTeam"),
            _dao("EocabFvqttEamwQKoFyQxLPnx9HWDdVDS9wwrUX1aKKbJ5g", "Alzymologist"),
            _dao("FDL99LDYERjevxPnXBjNGHZv13FxCGHrqh2N5zWQXx1finf", "Georgii / Space Invader"),
            _dao("J9FdcwiNLso4hcJFTeQvy7f7zszGhKoVh5hdBM2qF7joJQa", "Ivy voter collective"),
            _dao("FcjmeNzPk3vgdENm1rHeiMCxFK96beUoi2kb59FmCoZtkGF", "Staker Space"),
        ),
    ),
    _cohort(
        2, "kusama", CohortStatus.CLOSED,
        start=("2024-06-20T17:34:30Z", 23694996),
        end=("2024-10-09T14:15:24Z", 25266052),
        tracks=DV_TRACKS,
        delegates=(
            _dao("FDL99LDYERjevxPnXBjNGHZv13FxCGHrqh2N5zWQXx1finf", "Georgii / Space Invader"),
            _dao("GqC37KSFFeGAoL7YxSeP1YDwr85WJvLmDDQiSaprTDAm8Jj", "Alex PromoTeam"),
            _dao("CpjsLDC1JFyrhm3ftC9Gs4QoyrkHKhZKtK7YqGTRFtTafgp", "Bruno Škvorc"),
            _dao("DG8Q1VmFkmDwuKDN9ZqdB78W6BiXTX5Z33XzZNAykuB5nFh", "Dr. Jeff Cao"),
            _dao("CbNFBz4eykqiGqwYTfzRcYZGDh8xhbwwy4QaeiS4ctEPvXn", "Lorena Fabris"),
            _dao("Ftuq9bHvQb5NiU5JA7q79fxYn9FVBeRjNBHL3RH5raN9qck", "KSM Community Collective"),
            _dao("DDCNPp8oeYBcBM44b32iSse4t4yfTnDJbjQxohF59Fo23EF", "Luke Schoen"),
            _dao("H1qzURXmYGLfwMsviLpMeN8S9zjAPmc1LBCSeQkCAieKUFs", "Roger Le"),
            _dao("Hw38QgLquVjhFc6TmXKzUQie3yezV8dsaP66CnZQm6Tc75M", "Tommi/Hitchhooker | Rotko.net"),
        ),
    ),
    _cohort(
        3, "kusama", CohortStatus.CLOSED,
        start=("2024-11-11T16:07:06Z", 25732403),
        end=("2025-04-14T13:35:24Z", 27921225),
        tracks=DV_TRACKS,
        delegates=(
            _dao("DCZyhphXsRLcW84G9WmWEXtAA8DKGtVGSFZLJYty8Ajjyfa", "ChaosDAO"),
            _dao("JHTfbt39EL1CcbKteN6hG5L5pWo9XWi9XFiyuS9q24cAc8u", "KusDAO"),
            _dao("HYmYudY1cxN6XyY98dd82TckYF2YiPFc6sXmHqMoKifGAje", "Le Nexus"),
            _dao("EPrEfsCZQtKt3Cp3vx6BSE4d9ACxMWTN2E5kQBRe612WpL2", _LUCKY_FRIDAY_LABS),
            _dao("Hgm7ELPfRmPKbHgGZCYEZGTjJX8VicXEnFKec7YAeFgAd4d", "Polkadot Hungary"),
            _dao("HcEbeTviCK33EddVN3mfJ6WymWLyKfFuekjhjn5PFirjJ5F", "Saxemberg"),
        ),
    ),
    _cohort(
        4, "kusama", CohortStatus.CLOSED,
        start=("2025-04-14T13:30:42Z", 27921178),
        end=("2025-09-01T18:40:24Z", 29912023),
        tracks=DV_TRACKS,
        delegates=(
            _dao("Hgm7ELPfRmPKbHgGZCYEZGTjJX8VicXEnFKec7YAeFgAd4d", "Hungarian Polkadot DAO"),
            _dao("EwWrc8UZxaLE8WqCHkygUWAz1PxLc1Jdgzq1kMd8Ac7hKqF", "JAM Implementers DAO"),
            _dao("JHTfbt39EL1CcbKteN6hG5L5pWo9XWi9XFiyuS9q24cAc8u", "KusDAO"),
            _dao("ELCdsyWFNC7twEeBcQvdpCmpJhGBgiVeWtaKqRqXGn5ATiA", _PERMANENCE_DAO),
            _dao("DaCSCEQBRmMaBLRQQ5y7swdtfRzjcsewVgCCmngeigwLiax", "Polkaworld"),
            _dao("E3Ra4aGnmZGGtGaLsoCqjtJowT1qDvuLNEwB8t74M1UQrWM", "Trustless Core"),
        ),
    ),
    _cohort(
        5, "kusama", CohortStatus.ONGOING,
        start=("2025-09-01T19:06:30Z", 29912282),
        end=(None, None),
        tracks=DV_TRACKS,
        delegates=(
            _dao("HYmYudY1cxN6XyY98dd82TckYF2YiPFc6sXmHqMoKifGAje", "Le Nexus"),
            _dao("ELCdsyWFNC7twEeBcQvdpCmpJhGBgiVeWtaKqRqXGn5ATiA", _PERMANENCE_DAO),
            _dao("EYSyMJjPk5HJb2ZDAYmEpBu7ZgWm7hZ5b1BE88uCifynRgt", "Polkadot Poland DAO"),
            _dao("GykHmXkXiMHV2hnsMdZ7xE7zgd9tiwT8k787MovVavAVmTH", "REEEEEEEEEE DAO"),
            _dao("HcEbeTviCK33EddVN3mfJ6WymWLyKfFuekjhjn5PFirjJ5F", "Saxemberg"),
            _dao("DvJWp99ooffSqbTaM3sCYCxLUWbz2eEVqra9oeUZZYbMY14", "PBA Alumni Voting DAO"),
            _dao("D8LipdVuWD5tT3jCjt4WmYMfHi1vRVjpfbK9cz2G2HrWRLw", "Trustless Core - Cohort 5"),
            _guardian("EyPcJsHXv86Snch8GokZLZyrucug3gK1RAghBD2HxvL1YRZ", "Cybergov — AI Agents"),
            _guardian("EvoLanodoqDsgHb98Ymbu41uXXKfCPDKxeM6dXHyJ2JoVus", "Daniel Olano"),
            _guardian("DuCg7rhST4TX6DWsyePUjntsmJd6UNyQVTHWD5BFjcgmgWp", "Flez"),
            _guardian("GNdJk9L6P84JXu6wibTzwPiB3vt2rwMjzGEETchf87uNuyW", "GoverNoun AI (Governance Agent) — AI Agent"),
            _guardian("FPznjjQJpHieoy3TUruw9YT6DDRETkBxWv3yFEVUMCgn8q8", "The White Rabbit"),
        ),
    ),
)

_POLKADOT_COHORTS = (
    _cohort(
        1, "polkadot", CohortStatus.CLOSED,
        start=("2024-02-26T18:50:06Z", 19653189),
        end=("2024-06-10T20:51:42Z", 21157754),
        tracks=_FIRST_ROUND_TRACKS,
        delegates=(
            _dao("13EyMuuDHwtq5RD6w3psCJ9WvJFZzDDion6Fd2FVAqxz1g7K", "ChaosDAO"),
            _dao("1jPw3Qo72Ahn7Ynfg8kmYNLEPvHWHhPfPNgpJfp5bkLZdrF", "Jimmy Tudeski"),
            _dao("15fTH34bbKGMUjF1bLmTqxPYgpg481imThwhWcQfCyktyBzL", "Kukabi|Helikon"),
            _dao("12s6UMSSfE2bNxtYrJc6eeuZ7UxQnRpUzaAh1gPQrGNFnE8h", "Polkadotters"),
            _dao("153YD8ZHD9dRh82U419bSCB5SzWhbdAFzjj4NtA5pMazR2yC", "Saxemberg"),
            _dao("1ZSPR3zNg5Po3obkhXTPR95DepNBzBZ3CyomHXGHK9Uvx6w", "William"),
            _dao("12mP4sjCfKbDyMRAEyLpkeHeoYtS5USY4x34n9NMwQrcEyoh", "Polkaworld"),
        ),
    ),
    _cohort(
        2, "polkadot", CohortStatus.CLOSED,
        start=("2024-06-11T22:01:30Z", 21172801),
        end=("2024-10-09T19:15:30Z", 22891629),
        tracks=DV_TRACKS,
        delegates=(
            _dao("1CaXBXVGNbey352w7ydA1A2yDyNQLshycom8Zyj69v5eRNK", "BRA_16 Collective"),
            _dao("13EyMuuDHwtq5RD6w3psCJ9WvJFZzDDion6Fd2FVAqxz1g7K", "ChaosDAO"),
            _dao("14Gn7SEmCgMX7Ukuppnw5TRjA7pao2HFpuJo39frB42tYLEh", "Ezio Rojas"),
            _dao("16XYgDGN6MxvdmjhRsHLT1oqQVDwGdEPVQqC42pRXiZrE8su", "Irina Karagyaur"),
            _dao("12pXignPnq8sZvPtEsC3RdhDLAscqzFQz97pX2tpiNp3xLqo", _LUCKY_FRIDAY_LABS),
            _dao("15TzZpYZa2rwfBNKhkDzuU1JApgACxD3m6pcaNt4SZneYTV5", "Mexican Collective"),
            _dao("12BJTP99gUerdvBhPobiTvrWwRaj1i5eFHN9qx51JWgrBtmv", "OneBlock+"),
            _dao("13mZThJSNdKUyVUjQE9ZCypwJrwdvY8G5cUCpS9Uw4bodh4t", "Polkassembly"),
            _dao("153YD8ZHD9dRh82U419bSCB5SzWhbdAFzjj4NtA5pMazR2yC", "Saxemberg"),
            _dao("13Bf8PY8dks2EecNFW7hrqJ7r1aj7iEFFUudFJFvoprXdUiH", "Scytale Digital"),
        ),
    ),
    _cohort(
        3, "polkadot", CohortStatus.CLOSED,
        start=("2024-11-11T16:31:24Z", 23363983),
        end=("2025-04-14T13:50:24Z", 25571026),
        tracks=DV_TRACKS,
        delegates=(
            _dao("13EyMuuDHwtq5RD6w3psCJ9WvJFZzDDion6Fd2FVAqxz1g7K", "ChaosDAO"),
            _dao("15KHTWdJyzyxaQbBNRmQN89KmFr1jPXXsPHM5Rxvd1Tkb2XZ", "KusDAO"),
            _dao("16Gpd7FDEMR6STGyzTqKie4Xd3AXWNCjr6K8W8kSaG1r4VTQ", "Le Nexus"),
            _dao("12pXignPnq8sZvPtEsC3RdhDLAscqzFQz97pX2tpiNp3xLqo", _LUCKY_FRIDAY_LABS),
            _dao("13z9CiETVYCrxz3cghDuTyRGbaYQrwSyRnRcJX5iFbXvrwhT", "Polkadot Hungary"),
            _dao("153YD8ZHD9dRh82U419bSCB5SzWhbdAFzjj4NtA5pMazR2yC", "Saxemberg"),
        ),
    ),
    _cohort(
        4, "polkadot", CohortStatus.CLOSED,
        start=("2025-04-14T13:50:24Z", 25571026),
        end=("2025-09-01T18:15:42Z", 27578624),
        tracks=DV_TRACKS,
        delegates=(
            _dao("13z9CiETVYCrxz3cghDuTyRGbaYQrwSyRnRcJX5iFbXvrwhT", "Hungarian Polkadot DAO"),
            _dao("13NCLd3foNpsv1huPDzvvfyKh37NEEkGFotZnP52CTR98YFJ", "JAM Implementers DAO"),
            _dao("15KHTWdJyzyxaQbBNRmQN89KmFr1jPXXsPHM5Rxvd1Tkb2XZ", "KusDAO"),
            _dao("14ZaBmSkr6JWf4fUDHbApqHBvbeeAEBSAARxgzXHcSruLELJ", _PERMANENCE_DAO),
            _dao("12mP4sjCfKbDyMRAEyLpkeHeoYtS5USY4x34n9NMwQrcEyoh", "Polkaworld"),
            _dao("13vYFRVn6d4e3vQtrFJppQKN9qhatbCLwci2JQdWuNoXw8i7", "Trustless Core"),
        ),
    ),
    _cohort(
        5, "polkadot", CohortStatus.ONGOING,
        start=("2025-09-01T18:11:12Z", 27578579),
        end=(None, None),
        tracks=DV_TRACKS,
        delegates=(
            _dao("16Gpd7FDEMR6STGyzTqKie4Xd3AXWNCjr6K8W8kSaG1r4VTQ", "Le Nexus"),
            _dao("14ZaBmSkr6JWf4fUDHbApqHBvbeeAEBSAARxgzXHcSruLELJ", _PERMANENCE_DAO),
            _dao("1313ciB4VzPeH3n1QKJym1brBmzRdfHBEctWipgH4uGsyF6n", "Polkadot Poland DAO"),
            _dao("13du3Rt2CAV9L1v1QXTeYosuKaiBSYiPWpa2B4nxzfSdEAF1", "REEEEEEEEEE DAO"),
            _dao("11fx8xKPNd4zVSBxkpN8qhhaGEmNJvPgKqwhDATZQXs7dkM", "Saxemberg"),
            _dao("16m5p2WXqhRtYZFxzR4VUCBu9h9VDgg8AP1DzqUfduT4pdjD", "Trustless Core - Cohort 5"),
            _dao("15EVjoms1KvEAvZaaNYYvnWHmc3Xg1Du3ECuARHyXdPyh1bs", "PBA Alumni Voting DAO"),
            _guardian("13Q56KnUmLNe8fomKD3hoY38ZwLKZgRGdY4RTovRNFjMSwKw", "Cybergov — AI Agents"),
            _guardian("15oLanodWWweiZJSoDTEBtrX7oGfq6e8ct5y5E6fVRDPhUgj", "Daniel Olano"),
            _guardian("1haHsRuCUCkbkPRmSrnfP8ps6cTaR2b5JCU5uNPUbxsVPbf", "Flez"),
            _guardian("14oJnm4XKoNbzR6B8eqRF8rrt5eHvVgKN79y16L6jQvvp3pt", "GoverNoun AI (Governance Agent) — AI Agent"),
            _guardian("13pgGkebYEYGLhA7eR6sBM1boEvq86V9adonjswtYe1iDK2K", "The White Rabbit"),
        ),
    ),
)

DV_COHORTS: Dict[str, Tuple[Cohort, ...]] = {
    "kusama": _KUSAMA_COHORTS,
    "polkadot": _POLKADOT_COHORTS,
}


def get_cohorts(network: str) -> List[Cohort]:
    """Cohorts of a network in round order; empty for networks without any"""
    cohorts = DV_COHORTS.get(network.lower())
    if cohorts is None:
        logger.debug(f"No decentralized voices cohorts for network '{network}'")
        return []
    return list(cohorts)


def get_current_cohort(network: str) -> Optional[Cohort]:
    return select_cohort(get_cohorts(network))


def get_cohort(network: str, index: int) -> Optional[Cohort]:
    return select_cohort(get_cohorts(network), index)

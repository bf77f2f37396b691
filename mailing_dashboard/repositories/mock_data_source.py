"""
Mock data source producing realistic fake call-center data.
Used for local development when the remote API is unavailable.
"""
import asyncio
import math
import random
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from mailing_dashboard.core.logging_config import get_logger
from mailing_dashboard.repositories.data_source import DataSource

logger = get_logger("repositories.mock")

DISPOSITIONS = ["ANSWERED", "NO ANSWER", "BUSY", "FAILED"]
LIST_NAMES = ["Mailing_SP_High", "Mailing_RJ_Leads", "Retorno_Vendas", "", None]


class MockDataSource(DataSource):
    """In-memory data source mirroring the remote API's filtering and pagination."""

    def __init__(self, seed: int = 42, recording_count: int = 200, latency_seconds: float = 0.0):
        self.latency_seconds = latency_seconds
        self._random = random.Random(seed)
        self._recordings = self._generate_recordings(recording_count)
        self._mailings: Dict[str, List[Dict[str, Any]]] = {}
        self._inserted_at: Dict[str, List[str]] = {}
        self._seen_phones: set = set()
        self._next_id = 1

    async def upload_mailing_batch(self, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        await self._pause()
        novos = 0
        duplicados = 0
        phones = 0
        now = datetime.now().isoformat(timespec="seconds")
        for row in rows:
            name = str(row.get("malling_name") or "sem_nome")
            phone = str(row.get("telefone1") or "").strip()
            if phone:
                phones += 1
            if phone and phone in self._seen_phones:
                duplicados += 1
                continue
            if phone:
                self._seen_phones.add(phone)
            record = {"id": self._next_id, **row, "nome_malling": name, "data_insercao": now}
            record.pop("malling_name", None)
            self._next_id += 1
            self._mailings.setdefault(name, []).append(record)
            self._inserted_at.setdefault(name, []).append(now)
            novos += 1
        logger.debug(f"Mock ingestion: {novos} new, {duplicados} duplicated")
        return {
            "message": "Mailing processado com sucesso",
            "totalItens": len(rows),
            "totalTelefonesProcessados": phones,
            "totalNovosMalling": novos,
            "totalDuplicadosLogs": duplicados,
        }

    async def fetch_mailings_list(self, nome: Optional[str] = None, data: Optional[str] = None) -> Dict[str, Any]:
        await self._pause()
        names = sorted(self._mailings)
        if nome:
            names = [n for n in names if nome.lower() in n.lower()]
        if data:
            names = [n for n in names if any(ts.startswith(data) for ts in self._inserted_at.get(n, []))]
        return {"success": True, "mailings": names, "total": len(names)}

    async def fetch_compatible_data(self, mailings: List[str], page: int, limit: int) -> Dict[str, Any]:
        await self._pause()
        records = [r for name in mailings for r in self._mailings.get(name, [])]
        ceps_by_mailing: Dict[str, set] = {}
        for record in records:
            ceps_by_mailing.setdefault(record.get("cep"), set()).add(record["nome_malling"])
        compatible = [r for r in records if r.get("cep") and len(ceps_by_mailing[r.get("cep")]) > 1]
        return _paginate_payload(compatible, page, limit)

    async def fetch_recordings(self, params: Dict[str, Any]) -> Dict[str, Any]:
        await self._pause()
        sem_lista = bool(params.get("sem_lista"))
        data = list(self._recordings)

        if sem_lista:
            data = [r for r in data if not r["lista_nome"]]
        else:
            data = [r for r in data if r["lista_nome"]]
            lista_nome = params.get("lista_nome")
            if lista_nome:
                data = [r for r in data if lista_nome.lower() in r["lista_nome"].lower()]

        if params.get("disposition"):
            data = [r for r in data if r["disposition"] == params["disposition"]]
        if params.get("start_date"):
            data = [r for r in data if r["calldate"] >= params["start_date"]]
        if params.get("end_date"):
            data = [r for r in data if r["calldate"] <= params["end_date"]]

        data.sort(key=lambda r: r["calldate"], reverse=True)

        page = int(params.get("page") or 1)
        limit = int(params.get("limit") or 15)
        total = len(data)
        total_pages = math.ceil(total / limit) if limit else 0
        start = (page - 1) * limit
        return {
            "totalRegistros": total,
            "filtro_sem_lista": sem_lista,
            "dados": data[start:start + limit],
            "paginacao": {
                "paginaAtual": page,
                "porPagina": limit,
                "totalPages": total_pages,
                "temProximaPagina": page < total_pages,
                "temPaginaAnterior": page > 1,
            },
        }

    async def fetch_mailing_stats(self, params: Dict[str, Any]) -> Dict[str, Any]:
        await self._pause()
        stats = []
        for name in sorted(self._mailings):
            if params.get("nome") and params["nome"].lower() not in name.lower():
                continue
            records = self._mailings[name]
            phones = {r.get("telefone1") for r in records if r.get("telefone1")}
            inserted = self._inserted_at[name]
            stats.append({
                "nome_malling": name,
                "total_registros": len(records),
                "total_telefones_unicos": len(phones),
                "total_duplicados": 0,
                "total_geral": len(records),
                "taxa_duplicacao": 0,
                "data_primeira_insercao": min(inserted),
                "data_ultima_insercao": max(inserted),
            })

        page = int(params.get("page") or 1)
        limit = int(params.get("limit") or 15)
        total_pages = math.ceil(len(stats) / limit) if limit else 0
        start = (page - 1) * limit
        total_registros = sum(s["total_registros"] for s in stats)
        return {
            "totalMailings": len(stats),
            "totalPages": total_pages,
            "paginaAtual": page,
            "porPagina": limit,
            "temProximaPagina": page < total_pages,
            "temPaginaAnterior": page > 1,
            "totaisGerais": {
                "total_registros": total_registros,
                "total_telefones_unicos": sum(s["total_telefones_unicos"] for s in stats),
                "total_duplicados": 0,
                "total_geral": total_registros,
                "taxa_duplicacao_geral": 0,
            },
            "estatisticas": stats[start:start + limit],
        }

    async def fetch_lists(self) -> Any:
        await self._pause()
        names = sorted({r["lista_nome"] for r in self._recordings if r["lista_nome"]})
        return {"success": True, "listas": names}

    async def _pause(self) -> None:
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)

    def _generate_recordings(self, count: int) -> List[Dict[str, Any]]:
        rnd = self._random
        start = datetime(2023, 1, 1)
        span = (datetime(2024, 12, 31) - start).total_seconds()
        recordings = []
        for i in range(count):
            date = start + timedelta(seconds=rnd.random() * span)
            duration = rnd.randrange(300)
            recordings.append({
                "id": i + 1,
                "calldate": date.isoformat(),
                "src": f"100{rnd.randrange(10)}",
                "dst": f"119{rnd.randrange(10000000, 100000000)}",
                "duration": duration,
                "billsec": max(0, duration - 10),
                "disposition": rnd.choice(DISPOSITIONS),
                "gravacao": "path/to/file.wav" if rnd.random() > 0.5 else None,
                "destino": "SIP/Trunk",
                "cml_nome": "Campaign A",
                "lista_nome": rnd.choice(LIST_NAMES),
                "cml_id": 101,
                "tipomailing": "active",
                "usr_nome": f"Agent_{rnd.randrange(5)}",
                "data_insercao": date.isoformat(),
            })
        return recordings


def _paginate_payload(records: List[Dict[str, Any]], page: int, limit: int) -> Dict[str, Any]:
    total = len(records)
    start = (page - 1) * limit
    return {
        "totalRegistros": total,
        "paginaAtual": page,
        "porPagina": limit,
        "totalPages": math.ceil(total / limit) if limit else 0,
        "dados": records[start:start + limit],
    }
